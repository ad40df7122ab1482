"""Line-direction repair for Hebrew OCR output."""

import re

_HEBREW_RE = re.compile(r"[\u0590-\u05FF]")


def fix_rtl_text(text: str) -> str:
    """Normalize OCR text and reorder mixed Hebrew/Latin lines."""
    if not text:
        return ""
    cleaned = text.replace("\r\n", "\n").replace("\r", "\n")
    cleaned = cleaned.replace("״", '"').replace("׳", "'")
    cleaned = cleaned.replace("\t", " ")
    cleaned = re.sub(r"\n\s*\n", "\n\n", cleaned)
    cleaned = re.sub(r" {2,}", " ", cleaned).strip()
    return "\n".join(fix_hebrew_line_direction(line.strip()) for line in cleaned.split("\n"))


def fix_hebrew_line_direction(line: str) -> str:
    """Place Hebrew-script tokens before non-Hebrew tokens on a mixed line.

    Relative order inside each group is kept. Lines without Hebrew, or
    with Hebrew only, come back unchanged.
    """
    if not _HEBREW_RE.search(line):
        return line
    words = line.split()
    hebrew = [w for w in words if _HEBREW_RE.search(w)]
    other = [w for w in words if not _HEBREW_RE.search(w)]
    if hebrew and other:
        return " ".join(hebrew + other)
    return line
