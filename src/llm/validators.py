"""Validation of extracted verdict fields.

The parser only finds WHERE the model put grade/reasoning/sources. This
module decides whether those values make a usable Verdict:

- grade must be present and map onto the five-label scale (fail-closed:
  an unknown label is rejected, never passed through as free text)
- reasoning must be present and non-blank
- sources are optional; missing sources become the NO_SOURCES sentinel

Checks run in that order, so a response missing both grade and reasoning
reports MissingGrade.
"""

import re
from typing import Any, Optional

from src.schemas.verdict import (
    Grade,
    ParseFailure,
    ParseFailureKind,
    ParseOutcome,
    RawFields,
    Verdict,
)

# "1. ", "2) ", "- ", "* ", "• " at the start of a source line
_LIST_MARKER = re.compile(r"^(?:\d+[.)](?:\s+|$)|[-*•](?:\s+|$))")

# Keys worth reading when the model returns a source as an object
_SOURCE_KEYS = ("url", "link", "source", "title", "name")


def clean_source_line(line: str) -> str:
    """Trim a source and drop any leading list numbering or bullet."""
    return _LIST_MARKER.sub("", line.strip(), count=1).strip()


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (list, tuple)):
        return " ".join(_as_text(v) for v in value if _as_text(v))
    return str(value).strip()


def _source_from_item(item: Any) -> str:
    if isinstance(item, dict):
        for key in _SOURCE_KEYS:
            value = item.get(key)
            if isinstance(value, str) and value.strip():
                return clean_source_line(value)
        return ""
    if item is None:
        return ""
    return clean_source_line(str(item))


def normalize_sources(value: Any) -> list[str]:
    """Coerce whatever the model gave for sources into a list of strings.

    A single string stays a single source (it is never split on commas). A
    string spanning several lines is read as one source per line.
    """
    if value is None:
        return []
    if isinstance(value, str):
        lines = value.splitlines() or [value]
        return [s for s in (clean_source_line(line) for line in lines) if s]
    if isinstance(value, (list, tuple)):
        return [s for s in (_source_from_item(item) for item in value) if s]
    source = _source_from_item(value)
    return [source] if source else []


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def validate_fields(fields: RawFields, statement: Optional[str] = None) -> ParseOutcome:
    """Validate extracted fields and build the Verdict.

    Args:
        fields: Raw values from one extraction strategy
        statement: Statement being checked, copied onto failures

    Returns:
        Verdict, or ParseFailure naming the first check that failed
    """
    if _is_blank(fields.grade):
        return ParseFailure(
            kind=ParseFailureKind.MISSING_GRADE,
            details=f"Model output has no grade ({fields.strategy})",
            strategy=fields.strategy,
            statement=statement,
        )

    grade = Grade.from_label(fields.grade)
    if grade is None:
        raw_grade = str(fields.grade).strip()
        return ParseFailure(
            kind=ParseFailureKind.UNRECOGNIZED_GRADE_LABEL,
            details=(
                f"Unrecognized grade '{raw_grade}', expected one of: "
                + ", ".join(g.value for g in Grade)
            ),
            raw_value=raw_grade,
            strategy=fields.strategy,
            statement=statement,
        )

    reasoning = _as_text(fields.reasoning)
    if not reasoning:
        return ParseFailure(
            kind=ParseFailureKind.MISSING_REASONING,
            details=f"Model output has no reasoning ({fields.strategy})",
            strategy=fields.strategy,
            statement=statement,
        )

    return Verdict(
        grade=grade,
        reasoning=reasoning,
        sources=normalize_sources(fields.sources),
    )
