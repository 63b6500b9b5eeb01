"""Pydantic schemas for the fact-check verdict.

The model answers in free text. Everything it says passes through
src.llm.parser before reaching these types, so downstream code can trust:

  - grade is one of exactly five labels (Grade)
  - reasoning is non-empty and trimmed
  - sources is never empty (the "no sources" sentinel fills the gap)

Sources stay a list here. They are flattened to a single display string
only in to_response(), at the HTTP boundary.
"""

import re
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator

from src.schemas.api import FactCheckResponse


NO_SOURCES = "No sources found. Answer based on general knowledge."
SOURCES_SEPARATOR = ", "


# =============================================================================
# GRADE SCALE
# =============================================================================

# Characters that carry no meaning when comparing labels:
# "Mostly True", "mostly_true", "MOSTLY-TRUE" and "MostlyTrue" are the same.
_LABEL_NOISE = re.compile(r"[\s_\-]+")


def _normalize_label(value: str) -> str:
    value = value.strip().strip("\"'*`").strip()
    value = value.rstrip(".").strip()
    return _LABEL_NOISE.sub("", value).casefold()


class Grade(str, Enum):
    """Truthfulness scale, ordered least to most true."""

    ABSOLUTELY_FALSE = "Absolutely False"
    MOSTLY_FALSE = "Mostly False"
    NEUTRAL = "Neutral"
    MOSTLY_TRUE = "Mostly True"
    TRUTH = "Truth"

    @property
    def rank(self) -> int:
        """1 (Absolutely False) .. 5 (Truth)."""
        return list(Grade).index(self) + 1

    @classmethod
    def from_rank(cls, rank: int) -> Optional["Grade"]:
        members = list(cls)
        if 1 <= rank <= len(members):
            return members[rank - 1]
        return None

    @classmethod
    def from_label(cls, value: Union[str, int, None]) -> Optional["Grade"]:
        """Match a raw label against the scale.

        Comparison ignores case, whitespace, underscores, hyphens, wrapping
        quotes/asterisks and a trailing period. Integers 1..5 (or their string
        form) are read as ranks. Returns None when nothing matches.
        """
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return cls.from_rank(value)
        if not isinstance(value, str):
            return None

        normalized = _normalize_label(value)
        if not normalized:
            return None
        if normalized.isdecimal():
            try:
                return cls.from_rank(int(normalized))
            except ValueError:
                # Non-ASCII digits, or past the int conversion limit
                return None
        return _BY_NORMALIZED_LABEL.get(normalized)


_BY_NORMALIZED_LABEL = {_normalize_label(g.value): g for g in Grade}


# =============================================================================
# RAW FIELDS
# =============================================================================

class RawFields(BaseModel):
    """Untrusted field values pulled out of a completion.

    Produced by one extraction strategy in src.llm.parser and consumed by
    src.llm.validators. Values keep whatever type the model gave them
    (string, number, list) until validation.
    """

    grade: Any = None
    reasoning: Any = None
    sources: Any = None
    strategy: str


# =============================================================================
# VERDICT
# =============================================================================

class Verdict(BaseModel):
    """A successfully parsed fact-check result."""

    grade: Grade
    reasoning: str = Field(..., min_length=1)
    sources: list[str] = Field(default_factory=lambda: [NO_SOURCES])

    @field_validator("reasoning")
    @classmethod
    def reasoning_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Reasoning must not be empty")
        return v

    @field_validator("sources")
    @classmethod
    def default_sources(cls, v: list[str]) -> list[str]:
        cleaned = [s.strip() for s in v if s and s.strip()]
        return cleaned or [NO_SOURCES]

    @property
    def has_sources(self) -> bool:
        return self.sources != [NO_SOURCES]

    @property
    def sources_text(self) -> str:
        return SOURCES_SEPARATOR.join(self.sources)

    def to_response(self) -> FactCheckResponse:
        return FactCheckResponse(
            grade=self.grade.value,
            reasoning=self.reasoning,
            sources=self.sources_text,
        )


# =============================================================================
# PARSE FAILURE
# =============================================================================

class ParseFailureKind(str, Enum):
    MISSING_GRADE = "MissingGrade"
    MISSING_REASONING = "MissingReasoning"
    UNRECOGNIZED_GRADE_LABEL = "UnrecognizedGradeLabel"
    NO_STRUCTURE_FOUND = "NoStructureFound"


class ParseFailure(BaseModel):
    """Why a completion could not be turned into a Verdict.

    Malformed model output is an expected outcome, so the parser returns
    this instead of raising.
    """

    kind: ParseFailureKind
    details: str
    raw_value: Optional[str] = Field(
        default=None,
        description="Offending grade string (UnrecognizedGradeLabel only)"
    )
    strategy: Optional[str] = Field(
        default=None,
        description="Extraction strategy that found the fields, if any"
    )
    statement: Optional[str] = Field(
        default=None,
        description="Statement being checked, for diagnostics only"
    )


ParseOutcome = Union[Verdict, ParseFailure]
