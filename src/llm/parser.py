"""Verdict extraction from raw model output.

The model is asked for JSON but nothing guarantees it. Answers seen in the
wild include:

- Raw JSON: {"grade": "Truth", "reasoning": "...", "sources": [...]}
- JSON inside prose or a markdown block: "Here you go:\n```json\n{...}\n```"
- <think> tags: <think>...</think>{"grade": ...}
- Prefixed lines:
      Grade: Mostly True
      Reasoning: ...
      Sources:
      1. https://...
      2. https://...

Extraction is a chain of pure decoders (text -> RawFields | None), tried in
order. The first one that finds a verdict wins, so a JSON object with a
grade beats prefixed lines when a response contains both. The fields it
finds are then checked by src.llm.validators.

Nothing here does I/O or raises on bad input. A response the chain cannot
read comes back as a ParseFailure.
"""

import json
import re
from typing import Any, Callable, Optional

from src.llm.validators import clean_source_line, validate_fields
from src.schemas.verdict import (
    ParseFailure,
    ParseFailureKind,
    ParseOutcome,
    RawFields,
)

STRICT_JSON = "strict_json"
EMBEDDED_JSON = "embedded_json"
LINE_PREFIX = "line_prefix"

# First brace-delimited object, non-greedy, across newlines
_EMBEDDED_OBJECT = re.compile(r"\{.*?\}", re.DOTALL)

_PREFIX_LINE = re.compile(r"^(grade|reasoning|sources)\s*:\s*(.*)$", re.IGNORECASE)

Decoder = Callable[[str], Optional[RawFields]]


def strip_think_tags(raw: str) -> tuple[str, Optional[str]]:
    """Strip <think>...</think> tags from reasoning model output.

    Returns:
        Tuple of (content_after_think, thinking_content)
        - If <think> tags found: returns content after </think>, and the thinking
        - If no tags: returns original raw, None
    """
    think_match = re.search(r"<think>(.*?)</think>", raw, re.DOTALL)
    if think_match:
        thinking = think_match.group(1)
        after = raw[think_match.end():].strip()
        return after, thinking
    return raw, None


def _fields_from_object(obj: Any, strategy: str) -> Optional[RawFields]:
    """Pick verdict fields out of a decoded JSON value.

    Keys are matched case-insensitively ("Grade" and "grade" both count).
    Returns None unless obj is an object with a grade key, so unrelated
    JSON (or a stray {"sources": [...]}) does not stop the chain.
    """
    if not isinstance(obj, dict):
        return None

    by_key = {str(k).strip().lower(): v for k, v in obj.items()}
    if "grade" not in by_key:
        return None

    return RawFields(
        grade=by_key.get("grade"),
        reasoning=by_key.get("reasoning"),
        sources=by_key.get("sources"),
        strategy=strategy,
    )


def _load_object(candidate: str, strategy: str) -> Optional[RawFields]:
    try:
        obj = json.loads(candidate)
    except (ValueError, RecursionError):
        # ValueError covers JSONDecodeError and oversized integer literals
        return None
    return _fields_from_object(obj, strategy)


def _extract_balanced(text: str, open_char: str, close_char: str) -> Optional[str]:
    """Extract a balanced bracket expression from text.

    Args:
        text: Text starting with open_char
        open_char: Opening bracket ('{' or '[')
        close_char: Closing bracket ('}' or ']')

    Returns:
        The balanced expression including brackets, or None if unbalanced
    """
    if not text or text[0] != open_char:
        return None

    depth = 0
    in_string = False
    escape_next = False

    for i, char in enumerate(text):
        if escape_next:
            escape_next = False
            continue

        if char == '\\' and in_string:
            escape_next = True
            continue

        if char == '"':
            in_string = not in_string
            continue

        if in_string:
            continue

        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return text[:i + 1]

    return None  # Unbalanced


# =============================================================================
# DECODERS
# =============================================================================

def decode_strict_json(text: str) -> Optional[RawFields]:
    """The whole response is one JSON object."""
    return _load_object(text.strip(), STRICT_JSON)


def decode_embedded_json(text: str) -> Optional[RawFields]:
    """A JSON object somewhere inside surrounding prose.

    At each opening brace, the shortest {...} span is tried first. If that
    is not valid JSON (nested objects, braces inside strings), the balanced
    span from the same brace is tried. Braces that lead nowhere are skipped.
    """
    start = text.find("{")
    while start != -1:
        shortest = _EMBEDDED_OBJECT.match(text, start)
        if shortest is None:
            # No closing brace anywhere after this point
            return None

        fields = _load_object(shortest.group(0), EMBEDDED_JSON)
        if fields is None:
            balanced = _extract_balanced(text[start:], "{", "}")
            if balanced and balanced != shortest.group(0):
                fields = _load_object(balanced, EMBEDDED_JSON)
        if fields is not None:
            return fields

        start = text.find("{", start + 1)
    return None


def decode_line_prefixes(text: str) -> Optional[RawFields]:
    """Lines starting with "Grade:", "Reasoning:" or "Sources:".

    grade takes the rest of its line. reasoning takes the rest of its line,
    or the lines below it when the prefix stands alone. sources takes the
    rest of its line plus every following line up to the next prefix, each
    stripped of list numbering or bullets. A repeated prefix replaces the
    earlier value.
    """
    fields: dict[str, Any] = {}
    collecting: Optional[list[str]] = None

    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue

        match = _PREFIX_LINE.match(line)
        if match:
            key = match.group(1).lower()
            value = match.group(2).strip()
            if key == "sources":
                collecting = [value] if value else []
                fields[key] = collecting
            elif key == "reasoning" and not value:
                collecting = []
                fields[key] = collecting
            else:
                collecting = None
                fields[key] = value
            continue

        if collecting is not None:
            collecting.append(line)

    if not fields:
        return None

    reasoning = fields.get("reasoning")
    if isinstance(reasoning, list):
        reasoning = " ".join(reasoning)

    sources = fields.get("sources")
    if sources is not None:
        sources = [s for s in (clean_source_line(line) for line in sources) if s]

    return RawFields(
        grade=fields.get("grade"),
        reasoning=reasoning,
        sources=sources,
        strategy=LINE_PREFIX,
    )


DECODERS: tuple[Decoder, ...] = (
    decode_strict_json,
    decode_embedded_json,
    decode_line_prefixes,
)


def extract_fields(text: str) -> Optional[RawFields]:
    """Run the decoder chain; the first decoder that finds fields wins."""
    for decoder in DECODERS:
        fields = decoder(text)
        if fields is not None:
            return fields
    return None


def parse_verdict(raw: Optional[str], statement: Optional[str] = None) -> ParseOutcome:
    """Turn a raw completion into a Verdict, or say why it can't be done.

    Args:
        raw: Completion text exactly as the model returned it
        statement: The statement being checked. Only copied onto a
            ParseFailure for diagnostics; it never influences parsing.

    Returns:
        Verdict on success, ParseFailure otherwise. Same input, same output.
    """
    raw = raw or ""
    text, thinking = strip_think_tags(raw)
    if thinking is not None and not text:
        # Everything was inside <think>; the answer may still be in there
        text = thinking

    fields = extract_fields(text)
    if fields is None:
        return ParseFailure(
            kind=ParseFailureKind.NO_STRUCTURE_FOUND,
            details=(
                f"No JSON object or Grade/Reasoning/Sources lines found "
                f"in model output ({len(raw)} chars)"
            ),
            statement=statement,
        )

    return validate_fields(fields, statement=statement)
