"""Fact-check endpoint.

POST /api/fact-check {"text": "..."}

  200 {"grade", "reasoning", "sources"}       verdict parsed
  400 {"error": "Text is required"}           missing/blank text
  500 {"error": "Failed to fact-check text",  model answered, answer unusable
       "details": ...}
  500 {"error": "Failed to process            model call itself failed
       fact-checking request", "details": ...}

Both 500s are server-side: the client's input was fine.
"""

from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from src.llm.invoker import CompletionError, check_statement
from src.schemas.api import ErrorResponse, FactCheckRequest, FactCheckResponse
from src.schemas.verdict import ParseFailure
from src.utils.logging import log, get_logger

MODULE = "fact_check"
logger = get_logger()

TEXT_REQUIRED = "Text is required"
PARSE_FAILED = "Failed to fact-check text"
COMPLETION_FAILED = "Failed to process fact-checking request"

router = APIRouter()


def error_response(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/api/fact-check",
    response_model=FactCheckResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def fact_check(body: FactCheckRequest):
    """Fact-check a statement with the model and return a graded verdict."""
    if not body.text:
        log.info(logger, MODULE, "rejected", "Empty statement")
        return error_response(400, TEXT_REQUIRED)

    text = body.text
    log.info(logger, MODULE, "check_start", "Fact-checking statement",
             text_length=len(text), text=text[:80])

    try:
        outcome = await check_statement(text)
    except CompletionError as e:
        log.error(logger, MODULE, "completion_failed", "Model call failed",
                  error=str(e),
                  error_type=type(e.cause).__name__ if e.cause else None,
                  text_length=len(text))
        return error_response(500, COMPLETION_FAILED, str(e))

    if isinstance(outcome, ParseFailure):
        log.error(logger, MODULE, "parse_failed", "Unusable model output",
                  error=outcome.details, error_type=outcome.kind.value,
                  raw_grade=outcome.raw_value, strategy=outcome.strategy,
                  text=text[:80])
        return error_response(500, PARSE_FAILED, outcome.details)

    return outcome.to_response()
