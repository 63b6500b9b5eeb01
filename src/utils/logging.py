"""
Structured JSON logging.

Every log line is one JSON object with consistent, queryable fields:
ts, level, module, action, msg, plus any context passed as keyword args.

EXAMPLE QUERIES (Loki / jq)
===========================
# All errors
{project="truthcheck"} | json | level="ERROR"

# Model output the parser could not use
{project="truthcheck"} | json | action="parse_failed"

# Upstream API failures
{project="truthcheck"} | json | action="completion_failed"

# Grades handed out
{project="truthcheck"} | json | module="llm.invoker" action="check_done"

# Monitor LLM latency
{project="truthcheck"} | json | action="llm_response"

USAGE
=====
from src.utils.logging import log, get_logger, configure_logging

logger = get_logger()
log.info(logger, "api", "ready", "Server listening", port=5000)

log.error(logger, "fact_check", "completion_failed", "Model call failed",
          error=str(e), text_length=len(text))

ACTION NAMING
=============
Consistent suffixes for queryable actions:
  *_start     — beginning of an operation
  *_done      — successful completion
  *_failed    — error/failure
  *_retry     — trying again after a failure
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional

SERVICE = "truthcheck"

# Third-party loggers that are chatty below WARNING
NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "openai",
    "langchain",
    "langchain_core",
    "langchain_openai",
    "uvicorn.access",
    "asyncio",
)


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


class StructuredFormatter(logging.Formatter):
    """One JSON object per line; pretty single-line text in development."""

    def __init__(self, pretty: bool = False):
        super().__init__()
        self.pretty = pretty

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()

        # Structured log (emitted via StructuredLogger)
        if getattr(record, "_structured", False):
            data = {
                "ts": _timestamp(),
                "level": record.levelname,
                "module": record._module,
                "action": record._action,
                "msg": msg,
            }
            for key, value in record._extra.items():
                if value is not None:
                    data[key] = value
        else:
            # Third-party log (uvicorn, httpx...) — still one JSON line
            if self.pretty:
                return f"{_timestamp()[11:23]} {record.levelname[0]} [{record.name}] {msg}"
            data = {
                "ts": _timestamp(),
                "level": record.levelname,
                "module": record.name,
                "action": "log",
                "msg": msg,
            }

        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)

        if self.pretty:
            return self._pretty(data)
        return json.dumps(data, default=str, separators=(",", ":"))

    def _pretty(self, data: dict) -> str:
        """Human-readable format for development."""
        ts = data["ts"][11:23]  # HH:MM:SS.mmm
        lvl = data["level"][0]  # I/W/E/D
        mod = data["module"].upper()[:12].ljust(12)

        skip = {"ts", "level", "module", "action", "msg"}
        ctx = " ".join(f"{k}={v}" for k, v in data.items() if k not in skip)

        line = f"{ts} {lvl} [{mod}] {data['action']}: {data['msg']}"
        return line + (f" | {ctx}" if ctx else "")


class StructuredLogger:
    """
    Centralized structured logging.

    Every method takes a stdlib logger, a module name, an action name, a
    message, and arbitrary context fields. None-valued fields are dropped.
    """

    def _log(
        self,
        logger: logging.Logger,
        level: int,
        module: str,
        action: str,
        msg: str,
        **kwargs,
    ) -> None:
        extra = {
            "_structured": True,
            "_module": module,
            "_action": action,
            "_extra": {k: v for k, v in kwargs.items() if v is not None},
        }
        logger.log(level, msg, extra=extra)

    def debug(self, logger: logging.Logger, module: str, action: str, msg: str, **kwargs) -> None:
        self._log(logger, logging.DEBUG, module, action, msg, **kwargs)

    def info(self, logger: logging.Logger, module: str, action: str, msg: str, **kwargs) -> None:
        self._log(logger, logging.INFO, module, action, msg, **kwargs)

    def warning(self, logger: logging.Logger, module: str, action: str, msg: str, **kwargs) -> None:
        self._log(logger, logging.WARNING, module, action, msg, **kwargs)

    def error(
        self,
        logger: logging.Logger,
        module: str,
        action: str,
        msg: str,
        error: Optional[str] = None,
        error_type: Optional[str] = None,
        **kwargs,
    ) -> None:
        """Log ERROR level. error/error_type are first-class fields."""
        self._log(
            logger, logging.ERROR, module, action, msg,
            error=error, error_type=error_type, **kwargs,
        )


# Singleton instance — import this everywhere
log = StructuredLogger()

_service_logger: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    """The service-wide logger."""
    global _service_logger
    if _service_logger is None:
        _service_logger = logging.getLogger(SERVICE)
    return _service_logger


def configure_logging() -> None:
    """Configure root logger with structured formatter. Call once at startup.

    Reads from environment:
      LOG_FORMAT: "json" (default) or "pretty" (for development)
      LOG_LEVEL: "INFO" (default), "DEBUG", "WARNING", "ERROR"
    """
    pretty = os.environ.get("LOG_FORMAT", "json") == "pretty"
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter(pretty=pretty))

    logging.basicConfig(
        level=level,
        handlers=[handler],
        force=True,
    )

    # uvicorn installs its own handlers; route everything through ours
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = []
        uvicorn_logger.propagate = True

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
