"""LLM client configuration.

The fact-check call goes to an OpenAI-compatible chat completions API
through LangChain's ChatOpenAI. By default that is OpenAI itself; set
OPENAI_BASE_URL to point at any compatible server (llama.cpp, vLLM, ...).

  OPENAI_API_KEY    → API key (required for api.openai.com)
  OPENAI_MODEL      → model name (default gpt-4-turbo-preview)
  OPENAI_BASE_URL   → optional alternative endpoint
  LLM_TEMPERATURE   → default sampling temperature (0.7)
  LLM_MAX_TOKENS    → completion token cap (500)
  LLM_TIMEOUT_SECONDS → per-call timeout, enforced by the invoker (60)
"""

import os
from typing import Optional

from langchain_openai import ChatOpenAI

from src.utils.logging import log, get_logger

MODULE = "llm"
logger = get_logger()

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL")
MODEL = os.getenv("OPENAI_MODEL", "gpt-4-turbo-preview")
TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))
MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "500"))
TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))


def get_llm(temperature: Optional[float] = None) -> ChatOpenAI:
    """Get the chat client used for fact-checking.

    Args:
        temperature: Overrides LLM_TEMPERATURE. The invoker raises it on
            retries so a re-query doesn't repeat the same malformed answer.
    """
    if temperature is None:
        temperature = TEMPERATURE

    kwargs = {}
    if OPENAI_BASE_URL:
        kwargs["base_url"] = OPENAI_BASE_URL

    client = ChatOpenAI(
        api_key=OPENAI_API_KEY,
        model=MODEL,
        temperature=temperature,
        max_tokens=MAX_TOKENS,
        # The invoker applies its own timeout; no client-side retries either,
        # re-querying is decided there
        max_retries=0,
        **kwargs,
    )
    log.debug(logger, MODULE, "llm_init", "LLM client created",
              base_url=OPENAI_BASE_URL, model=MODEL, temperature=temperature)
    return client
