"""Pydantic schemas for structured data validation.

This package contains:
- api.py: Request/response schemas for the REST API
- verdict.py: The grade scale, the parsed Verdict and ParseFailure

Model output is parsed into a Verdict (or a ParseFailure) BEFORE anything
else touches it. Raw grade strings never travel past src.llm.parser.
"""

from src.schemas.api import (
    FactCheckRequest,
    FactCheckResponse,
    ErrorResponse,
    HealthResponse,
)

from src.schemas.verdict import (
    NO_SOURCES,
    SOURCES_SEPARATOR,
    Grade,
    Verdict,
    ParseFailureKind,
    ParseFailure,
    ParseOutcome,
    RawFields,
)

__all__ = [
    # API
    "FactCheckRequest",
    "FactCheckResponse",
    "ErrorResponse",
    "HealthResponse",
    # Verdict
    "NO_SOURCES",
    "SOURCES_SEPARATOR",
    "Grade",
    "Verdict",
    "ParseFailureKind",
    "ParseFailure",
    "ParseOutcome",
    "RawFields",
]
