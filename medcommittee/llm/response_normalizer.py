"""Turns a raw LLM completion into the fixed committee record shape.

Completions are expected to be JSON but often are not: they come wrapped in
code fences, carry trailing commas, smart quotes, bare keys or are cut off
mid-object. Each repair stage runs only when the previous parse failed, and
the last resort is scraping ``"field": "value"`` pairs with a regex.
``normalize`` never raises.
"""

import json
import re
from dataclasses import dataclass, field

from medcommittee.llm.exceptions import MalformedResponseError
from medcommittee.llm.schema import COMMITTEE_SCHEMA, ExtractionSchema
from medcommittee.logging.logger import Log

PARSE_DIRECT = "json"
PARSE_REPAIRED = "repaired"
PARSE_AGGRESSIVE = "aggressive"
PARSE_REGEX = "regex"

_MAX_DEPTH = 16

_MEMBER_NAME_KEYS = ("שם", "name")
_MEMBER_ROLE_KEYS = ("תפקיד", "role")

_DECISION_ALIASES: dict[str, tuple[str, ...]] = {
    "אחוז הנכות": ("אחוז הנכות הנובע מהפגיעה", "אחוז"),
    "סעיף ליקוי": ("סעיף",),
}

_TEXT_REPAIRS: tuple[tuple[re.Pattern[str], str], ...] = (
    # bare property names after a line break, an opening brace or a comma
    (
        re.compile(r'([{,\n][ \t]*)([^"{}\[\],\s][^":\n{},]*?)([ \t]*:)'),
        r'\1"\2"\3',
    ),
    (re.compile(r"}\s*{"), "}, {"),
    (re.compile(r"]\s*\n\s*\""), '],\n  "'),
    (re.compile(r"}\s*\n\s*\""), '},\n  "'),
    (re.compile(r"\"[ \t]*\n\s*\""), '",\n  "'),
    (re.compile(r'(?<!\\)"null"'), "null"),
    (re.compile(r",\s*([}\]])"), r"\1"),
)

_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\u200e\u200f\u2060\ufeff]")
_SMART_QUOTES = str.maketrans({"\u201c": '"', "\u201d": '"', "\u201e": '"', "\u00a0": " "})
_FENCE_RE = re.compile(r"^```[a-zA-Z]*[ \t]*\n?|\n?```$")


@dataclass
class NormalizedResponse:
    """Schema-shaped result: every schema key maps to a string."""

    fields: dict[str, str]
    decisions: list[dict[str, str]] = field(default_factory=list)
    parse_path: str = PARSE_DIRECT


def strip_code_fence(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_RE.sub("", cleaned).strip()
    return cleaned


def slice_object(text: str) -> str:
    """Return the span from the first ``{`` to the last ``}``.

    When there is no closing brace after the opening one the tail is kept,
    so a truncated object can still be balanced later.
    """
    start = text.find("{")
    if start == -1:
        return text
    end = text.rfind("}")
    if end < start:
        return text[start:]
    return text[start : end + 1]


def repair_json_text(text: str) -> str:
    """Apply the textual JSON repairs. Applying it twice equals applying it once."""
    repaired = text
    for pattern, replacement in _TEXT_REPAIRS:
        repaired = pattern.sub(replacement, repaired)
    return repaired


def aggressive_clean(text: str) -> str:
    """Drop invisible characters, straighten quotes and close what was left open."""
    cleaned = _INVISIBLE_RE.sub("", text).translate(_SMART_QUOTES)
    return repair_json_text(_balance(cleaned))


def _balance(text: str) -> str:
    stack: list[str] = []
    in_string = False
    escaped = False
    for char in text:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in "{[":
            stack.append("}" if char == "{" else "]")
        elif char in "}]" and stack and stack[-1] == char:
            stack.pop()

    if not in_string and not stack:
        return text
    balanced = text + '"' if in_string else text
    balanced = balanced.rstrip()
    if balanced.endswith(":"):
        balanced += " null"
    balanced = balanced.rstrip(",")
    return balanced + "".join(reversed(stack))


def _parse_object(text: str) -> dict[str, object]:
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise MalformedResponseError(f"Invalid JSON response: {exc}") from exc
    if not isinstance(parsed, dict):
        raise MalformedResponseError("JSON response must be an object")
    return parsed


class ResponseNormalizer:
    def __init__(self, schema: ExtractionSchema = COMMITTEE_SCHEMA) -> None:
        self._schema = schema

    @property
    def schema(self) -> ExtractionSchema:
        return self._schema

    def normalize(self, raw: str) -> NormalizedResponse:
        """Map a raw completion onto the schema.

        Returns a record with exactly the schema keys. Unparseable input
        degrades to regex scraping, which may leave every field empty.
        """
        candidate = slice_object(strip_code_fence(raw or ""))

        attempts = (
            (PARSE_DIRECT, lambda: candidate),
            (PARSE_REPAIRED, lambda: repair_json_text(candidate)),
            (PARSE_AGGRESSIVE, lambda: aggressive_clean(candidate)),
        )
        for path, prepare in attempts:
            try:
                parsed = _parse_object(prepare())
            except MalformedResponseError as exc:
                Log.debug(f"Response parse path '{path}' failed: {exc}")
                continue
            if path != PARSE_DIRECT:
                Log.info(f"LLM response parsed after '{path}' repair")
            return self._from_mapping(parsed, path)

        Log.warning("LLM response is not JSON, falling back to regex field scraping")
        return NormalizedResponse(fields=self._scrape(raw or ""), parse_path=PARSE_REGEX)

    def _from_mapping(self, parsed: dict[str, object], path: str) -> NormalizedResponse:
        fields = self._schema.empty_fields()
        decisions: list[dict[str, str]] = []
        for spec in self._schema.fields:
            key = next((k for k in spec.source_keys if k in parsed), None)
            if key is None:
                continue
            value = parsed[key]
            if spec.name == self._schema.decisions_field and isinstance(value, list):
                decisions = self._decision_rows(value)
            fields[spec.name] = to_text(value)
        return NormalizedResponse(fields=fields, decisions=decisions, parse_path=path)

    def _decision_rows(self, items: list[object]) -> list[dict[str, str]]:
        rows = []
        for item in items:
            if not isinstance(item, dict):
                continue
            row = {}
            for name in self._schema.decision_fields:
                keys = (name, *_DECISION_ALIASES.get(name, ()))
                key = next((k for k in keys if k in item), None)
                row[name] = to_text(item[key]) if key is not None else ""
            rows.append(row)
        return rows

    def _scrape(self, raw: str) -> dict[str, str]:
        fields = self._schema.empty_fields()
        for spec in self._schema.fields:
            for key in spec.source_keys:
                match = re.search(rf'"{re.escape(key)}"\s*:\s*"((?:[^"\\\n]|\\.)*)"', raw)
                if match:
                    fields[spec.name] = _unescape(match.group(1))
                    break
        return fields


def _unescape(value: str) -> str:
    try:
        return json.loads(f'"{value}"')
    except ValueError:
        return value


def to_text(value: object, _depth: int = 0) -> str:
    """Coerce any JSON value to the single-string form every field carries.

    Nesting deeper than ``_MAX_DEPTH`` is dropped, so arbitrarily deep
    arrays cannot exhaust the interpreter stack.
    """
    if _depth > _MAX_DEPTH:
        return ""
    if value is None:
        return ""
    if isinstance(value, str):
        return "" if value.strip() == "null" else value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        parts = (_item_text(item, _depth + 1) for item in value)
        return ", ".join(part for part in parts if part)
    if isinstance(value, dict):
        try:
            return json.dumps(value, ensure_ascii=False)
        except RecursionError:
            return ""
    return str(value)


def _item_text(item: object, depth: int) -> str:
    if isinstance(item, dict):
        name = next((to_text(item[k], depth + 1) for k in _MEMBER_NAME_KEYS if k in item), "")
        role = next((to_text(item[k], depth + 1) for k in _MEMBER_ROLE_KEYS if k in item), "")
        if name and role:
            return f"{name} ({role})"
        if name:
            return name
        texts = (to_text(v, depth + 1) for v in item.values())
        return " - ".join(text for text in texts if text)
    return to_text(item, depth)
