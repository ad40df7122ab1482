import re

_NIQQUD_AND_CANTILLATION_RE = re.compile(r"[\u0591-\u05BD\u05BF-\u05C2\u05C4-\u05C5\u05C7]")
_HEBREW_PUNCTUATION_RE = re.compile(r"[\u05C3\u05BE]")  # sof pasuq, maqaf
_GERESH_RE = re.compile(r"[\u05F3\u05F4]")
_WHITESPACE_RE = re.compile(r"\s+")
_INLINE_SPACE_RE = re.compile(r"[^\S\n]+")


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def clean_hebrew_text(text: str) -> str:
    """Strip Hebrew diacritics, unify punctuation and collapse whitespace.

    Line breaks survive; blank lines are dropped.
    """
    if not text:
        return ""
    cleaned = _NIQQUD_AND_CANTILLATION_RE.sub("", text)
    cleaned = _HEBREW_PUNCTUATION_RE.sub(" ", cleaned)
    cleaned = _GERESH_RE.sub('"', cleaned)
    lines = (_INLINE_SPACE_RE.sub(" ", line).strip() for line in cleaned.splitlines())
    return "\n".join(line for line in lines if line)
