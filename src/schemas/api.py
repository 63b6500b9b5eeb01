"""Pydantic schemas for API requests/responses."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class FactCheckRequest(BaseModel):
    """Request body for fact-checking a statement.

    text is optional at the schema level so the route can answer a missing
    or blank statement with the 400 body the frontend expects, instead of
    FastAPI's default 422.
    """
    text: Optional[str] = Field(None, description="The statement to fact-check")

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class FactCheckResponse(BaseModel):
    """Successful verdict, sources flattened for display."""
    grade: str
    reasoning: str
    sources: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
