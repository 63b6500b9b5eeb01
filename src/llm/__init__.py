"""LLM invocation package.

  from src.llm import check_statement, parse_verdict

  # Full fact-check (model call + parse)
  outcome = await check_statement("The Great Wall is visible from space")

  # Parse a completion you already have (pure, no I/O)
  outcome = parse_verdict(raw_text)

  if isinstance(outcome, ParseFailure): ...

Architecture:
  client.py     → LLM client configuration (ChatOpenAI)
  parser.py     → decoder chain: strict JSON, embedded JSON, prefixed lines
  validators.py → grade/reasoning/sources checks, Verdict construction
  invoker.py    → model call with timeout, parse, optional re-query
"""

# Client access
from src.llm.client import get_llm

# Invocation
from src.llm.invoker import (
    complete,
    check_statement,
    CompletionError,
)

# Parsing
from src.llm.parser import (
    parse_verdict,
    extract_fields,
    strip_think_tags,
    DECODERS,
)

# Validation
from src.llm.validators import (
    validate_fields,
    normalize_sources,
    clean_source_line,
)

__all__ = [
    # Client
    "get_llm",
    # Invoker
    "complete",
    "check_statement",
    "CompletionError",
    # Parser
    "parse_verdict",
    "extract_fields",
    "strip_think_tags",
    "DECODERS",
    # Validators
    "validate_fields",
    "normalize_sources",
    "clean_source_line",
]
