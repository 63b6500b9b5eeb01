"""Fact-check invocation: model call, parse, optional re-query.

  1. INVOKE: send the fixed system prompt + the statement to the model
  2. PARSE: turn the completion into a Verdict (src.llm.parser)
  3. RETRY: on a ParseFailure, ask again with a higher temperature,
     up to FACT_CHECK_MAX_RETRIES extra times (default 0: one call)

Two distinct failure modes reach the caller:
  - CompletionError (raised): the model call itself failed or timed out
  - ParseFailure (returned): the model answered, but not usably
"""

import asyncio
import os
import time
from typing import Optional

from langchain_core.messages import SystemMessage, HumanMessage

from src.llm.client import TIMEOUT_SECONDS, get_llm
from src.llm.parser import parse_verdict
from src.prompts.fact_check import FACT_CHECK_SYSTEM, build_user_prompt
from src.schemas.verdict import ParseFailure, ParseOutcome
from src.utils.logging import log, get_logger

MODULE = "llm.invoker"
logger = get_logger()

MAX_RETRIES = int(os.getenv("FACT_CHECK_MAX_RETRIES", "0"))
TEMPERATURE_ON_RETRY = float(os.getenv("LLM_TEMPERATURE_ON_RETRY", "0.9"))


class CompletionError(Exception):
    """Raised when the upstream model call fails (network, API, timeout)."""

    def __init__(
        self,
        message: str,
        statement: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.statement = statement
        self.cause = cause


def _content_text(content) -> str:
    """Chat message content is a string, or a list of content blocks."""
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


async def complete(
    statement: str,
    *,
    temperature: Optional[float] = None,
    timeout: Optional[float] = None,
) -> str:
    """Ask the model to fact-check a statement and return its raw answer.

    Args:
        statement: The user's statement, already validated as non-empty
        temperature: Sampling temperature (None: client default)
        timeout: Seconds before giving up (None: LLM_TIMEOUT_SECONDS)

    Returns:
        The completion text, trimmed. No structure is guaranteed.

    Raises:
        CompletionError: If the call fails or times out
    """
    timeout = TIMEOUT_SECONDS if timeout is None else timeout
    _t0 = time.monotonic()

    try:
        llm = get_llm(temperature=temperature)
        response = await asyncio.wait_for(
            llm.ainvoke([
                SystemMessage(content=FACT_CHECK_SYSTEM),
                HumanMessage(content=build_user_prompt(statement)),
            ]),
            timeout=timeout,
        )
    except asyncio.TimeoutError as e:
        raise CompletionError(
            f"Model call timed out after {timeout:g}s",
            statement=statement,
            cause=e,
        ) from e
    except Exception as e:
        raise CompletionError(str(e) or type(e).__name__,
                              statement=statement, cause=e) from e

    latency_ms = int((time.monotonic() - _t0) * 1000)
    raw = _content_text(response.content).strip()

    log.debug(logger, MODULE, "llm_response", "Model call complete",
              latency_ms=latency_ms, raw_length=len(raw))
    return raw


async def check_statement(
    statement: str,
    *,
    max_retries: Optional[int] = None,
    temperature: Optional[float] = None,
    temperature_on_retry: float = TEMPERATURE_ON_RETRY,
) -> ParseOutcome:
    """Fact-check a statement end to end.

    Args:
        statement: The user's statement
        max_retries: Extra model calls after a ParseFailure
            (None: FACT_CHECK_MAX_RETRIES)
        temperature: Temperature of the first call (None: client default)
        temperature_on_retry: Temperature of re-queries

    Returns:
        Verdict, or the ParseFailure of the last attempt

    Raises:
        CompletionError: If any model call fails
    """
    if max_retries is None:
        max_retries = MAX_RETRIES
    max_retries = max(0, max_retries)

    outcome: ParseOutcome
    for attempt in range(max_retries + 1):
        current_temp = temperature if attempt == 0 else temperature_on_retry
        raw = await complete(statement, temperature=current_temp)

        outcome = parse_verdict(raw, statement=statement)
        if not isinstance(outcome, ParseFailure):
            log.info(logger, MODULE, "check_done", "Statement fact-checked",
                     attempts=attempt + 1, grade=outcome.grade.value,
                     source_count=len(outcome.sources) if outcome.has_sources else 0)
            return outcome

        if attempt < max_retries:
            log.warning(logger, MODULE, "parse_retry",
                        "Unusable model output, asking again",
                        attempt=attempt + 1, kind=outcome.kind.value,
                        details=outcome.details)

    return outcome
