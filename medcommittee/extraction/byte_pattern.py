"""Last-resort text recovery straight from the file bytes.

Decoding is a best-effort guess: the single-byte Hebrew approximation maps
bytes 0xE0-0xFA onto the Hebrew letter block the way the Windows-1255 code
page places them, which is only right for documents that actually store
text that way. The result is a bag of keyword fragments, useful as a
signal for the LLM, not as faithful document text.
"""

import re
from collections.abc import Callable

from medcommittee.documents.models import RawDocument
from medcommittee.extraction.base import BaseTextStrategy
from medcommittee.logging.logger import Log

_HEBREW_PATTERNS = [
    re.compile(r"([א-ת]{2,})\s+([א-ת]{2,})(?:\s+([א-ת]{2,}))?"),
    re.compile(r"ועדה\s*רפואית[\s\S]*?(?=\n|\.)", re.IGNORECASE),
    re.compile(r"ביטוח\s*לאומי[\s\S]*?(?=\n|\.)", re.IGNORECASE),
    re.compile(r"שם[:\s]*המבוטח[:\s]*([א-ת\s]{3,50})", re.IGNORECASE),
    re.compile(r"מבוטח[:\s]*([א-ת\s]{3,30})", re.IGNORECASE),
    re.compile(r"אבחנה[:\s]*([א-ת\s\d]{3,100})", re.IGNORECASE),
    re.compile(r"אחוז[:\s]*נכות[:\s]*(\d{1,3}%?)", re.IGNORECASE),
    re.compile(r"סניף[:\s]*([א-ת\s]{3,30})", re.IGNORECASE),
    re.compile(r"משתתפי[:\s]*הועדה[:\s]*([א-ת\s\d.\"]{10,200})", re.IGNORECASE),
    re.compile(r"[א-ת]{3,}"),
]
_HEBREW_MATCH_LIMIT = 10

_DATA_PATTERNS = [
    re.compile(r"\b\d{9}\b"),
    re.compile(r"\d{1,2}[/\-.]\d{1,2}[/\-.]\d{4}"),
    re.compile(r"\d{1,3}%"),
]
_DATA_MATCH_LIMIT = 15

_HEBREW_BYTE_FIRST = 0xE0
_HEBREW_BYTE_LAST = 0xFA
_ALEF = 0x05D0


def decode_utf8(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _single_byte_table() -> dict[int, str]:
    table = {}
    for byte in range(256):
        if _HEBREW_BYTE_FIRST <= byte <= _HEBREW_BYTE_LAST:
            table[byte] = chr(_ALEF + byte - _HEBREW_BYTE_FIRST)
        elif 32 <= byte <= 126 or byte in (9, 10, 13):
            table[byte] = chr(byte)
        else:
            table[byte] = " "
    return table


_SINGLE_BYTE_TABLE = _single_byte_table()


def decode_hebrew_single_byte(data: bytes) -> str:
    """Map a Hebrew single-byte range to U+05D0.., keep ASCII and whitespace, blank the rest."""
    return data.decode("latin-1").translate(_SINGLE_BYTE_TABLE)


DECODERS: list[tuple[str, Callable[[bytes], str]]] = [
    ("utf-8", decode_utf8),
    ("hebrew-single-byte", decode_hebrew_single_byte),
]


def scan_fragments(content: str) -> list[str]:
    """Collect keyword, ID, date and percentage fragments from decoded text."""
    fragments: list[str] = []
    for pattern in _HEBREW_PATTERNS:
        fragments.extend(_matches(pattern, content, _HEBREW_MATCH_LIMIT))
    for pattern in _DATA_PATTERNS:
        fragments.extend(_matches(pattern, content, _DATA_MATCH_LIMIT))
    return fragments


def _matches(pattern: re.Pattern[str], content: str, limit: int) -> list[str]:
    found = []
    for match in pattern.finditer(content):
        found.append(match.group(0))
        if len(found) >= limit:
            break
    return found


class BytePatternStrategy(BaseTextStrategy):
    """Decodes raw bytes several ways and keeps regex-matched domain fragments."""

    name = "byte_pattern"

    def __init__(self, min_length: int, max_fragments: int = 50) -> None:
        super().__init__(min_length)
        self._max_fragments = max_fragments

    def extract(self, document: RawDocument) -> str:
        fragments: list[str] = []
        for decoder_name, decode in DECODERS:
            try:
                fragments.extend(scan_fragments(decode(document.content)))
            except (ValueError, re.error) as exc:
                Log.warning(f"Byte decoding '{decoder_name}' failed for {document.file_name}: {exc}")
        unique = list(dict.fromkeys(f.strip() for f in fragments if f and len(f.strip()) > 1))
        return " ".join(unique[: self._max_fragments]).strip()
