"""
Name: Structured Logger Configuration

Responsibilities:
  - Configure JSON-structured logging
  - Automatically include tool call context (request_id, tool)
  - Include stack traces for exceptions
  - Redact sensitive fields passed through `extra`

Collaborators:
  - context.py: Call-scoped context vars
  - Python logging module (stdlib)

Constraints:
  - No external dependencies (uses stdlib only)
  - Writes to stderr: stdout carries the MCP stdio protocol
  - Never log secrets (API keys, tokens)

Notes:
  - Import as: from raglit.logger import logger
  - Levels: DEBUG, INFO, WARNING, ERROR, CRITICAL
"""

import logging
import sys
import json
import traceback
from datetime import datetime, timezone
from typing import Any

from .context import get_context_dict

LOGGER_NAME = "raglit"

# R: LogRecord attributes that are not user-supplied extras
_INTERNAL_KEYS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "taskName", "message",
}


class JSONFormatter(logging.Formatter):
    """
    R: Format logs as JSON with automatic context enrichment.

    Includes:
      - timestamp (ISO 8601)
      - level, message, logger
      - module, function, line
      - request_id, tool (from context)
      - exception stack trace (if present)
      - extra fields from log call
    """

    # R: Fields that should never be logged (security)
    SENSITIVE_KEYS = {
        "password",
        "api_key",
        "apikey",
        "secret",
        "token",
        "authorization",
        "openai_api_key",
        "external_api_key",
    }

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        ctx = get_context_dict()
        if ctx:
            log_obj.update(ctx)

        for key, value in record.__dict__.items():
            if key in _INTERNAL_KEYS:
                continue
            if key.lower() in self.SENSITIVE_KEYS:
                log_obj[key] = "[REDACTED]"
            else:
                log_obj[key] = value

        if record.exc_info:
            log_obj["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_obj, default=str)


def setup_logger(name: str = LOGGER_NAME, level: int = logging.INFO) -> logging.Logger:
    """
    R: Configure and return structured logger.

    Args:
        name: Logger name (default: "raglit")
        level: Initial log level

    Returns:
        Configured logger with JSON formatting on stderr
    """
    log = logging.getLogger(name)
    log.setLevel(level)

    # R: Avoid duplicate handlers on reimport
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JSONFormatter())
        log.addHandler(handler)
    log.propagate = False

    return log


def set_log_level(level: str | int) -> None:
    """R: Change the level of the global logger (e.g. from LOG_LEVEL)."""
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")
    logger.setLevel(level)


# R: Global logger instance
logger = setup_logger()
