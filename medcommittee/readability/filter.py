import re

from medcommittee.readability.exceptions import UnreadableTextError
from medcommittee.readability.text_utils import normalize_whitespace

_READABLE_RE = re.compile(r"[\u05D0-\u05EAA-Za-z0-9.,;:!?()\[\]{}\"\-\s]")
_LETTER_RE = re.compile(r"[\u05D0-\u05EAA-Za-z]")

_WORD_BONUS_PER_TEN_WORDS = 5.0
_WORD_BONUS_CAP = 15.0


def readability_score(text: str) -> float:
    """Score text in [0, 100] by its share of readable characters plus a word bonus.

    Readable characters are Hebrew letters, Latin letters, digits, common
    punctuation and whitespace. Words are whitespace-delimited tokens
    longer than one character containing a Hebrew or Latin letter.
    The score is computed on whitespace-collapsed text.
    """
    normalized = normalize_whitespace(text)
    if not normalized:
        return 0.0
    readable = len(_READABLE_RE.findall(normalized))
    ratio = readable / len(normalized) * 100
    words = [w for w in normalized.split(" ") if len(w) > 1 and _LETTER_RE.search(w)]
    bonus = min(len(words) / 10 * _WORD_BONUS_PER_TEN_WORDS, _WORD_BONUS_CAP)
    return min(ratio + bonus, 100.0)


class TextReadabilityFilter:
    """Rejects garbage text before an LLM call is spent on it."""

    def __init__(self, threshold: float = 30.0) -> None:
        self._threshold = threshold

    @property
    def threshold(self) -> float:
        return self._threshold

    def score(self, text: str) -> float:
        return readability_score(text)

    def check(self, text: str) -> float:
        """Return the score, or raise UnreadableTextError below the threshold."""
        score = self.score(text)
        if score < self._threshold:
            raise UnreadableTextError(score, self._threshold)
        return score
