"""
Name: Tool Result Envelope and Error Mapping

Responsibilities:
  - Define the JSON envelope every tool returns ({"success": ..., ...})
  - Convert exceptions into error envelopes with a stable error code
  - Centralized logging of errors with correlation IDs

Collaborators:
  - tools.py: builds results for each tool call
  - server.py: turns results into MCP text content / error results
  - exceptions.py: RagLitError hierarchy

Constraints:
  - No failure escapes a tool handler as an exception
  - Unknown exceptions are logged with their stack trace
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import ValidationError

from .exceptions import RagLitError
from .logger import logger


class ErrorCode(str, Enum):
    """Error codes reported in tool error payloads."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    EMBEDDING_ERROR = "EMBEDDING_ERROR"
    EMBEDDING_TIMEOUT = "EMBEDDING_TIMEOUT"
    CHUNK_STORE_ERROR = "CHUNK_STORE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass
class ToolResult:
    """R: Payload returned to the tool caller; is_error sets the MCP error flag."""

    payload: dict[str, Any] = field(default_factory=dict)
    is_error: bool = False

    def to_text(self) -> str:
        return json.dumps(self.payload, default=str)


def success_result(**payload: Any) -> ToolResult:
    return ToolResult(payload={"success": True, **payload})


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def error_result(exc: Exception, **context: Any) -> ToolResult:
    """
    R: Map an exception to an error envelope.

    Args:
        exc: The failure raised while handling a tool call
        context: Extra payload keys echoed back (e.g. documentId)
    """
    if isinstance(exc, ValidationError):
        code = ErrorCode.VALIDATION_ERROR.value
        message = _validation_message(exc)
        logger.warning("Tool arguments rejected", extra={"error_message": message})
    elif isinstance(exc, RagLitError):
        code = exc.error_code
        message = exc.message
        logger.error(
            "Tool call failed",
            extra={
                "error_id": exc.error_id,
                "error_code": code,
                "error_message": message,
            },
        )
    elif isinstance(exc, ValueError):
        code = ErrorCode.VALIDATION_ERROR.value
        message = str(exc)
        logger.warning("Tool arguments rejected", extra={"error_message": message})
    else:
        code = ErrorCode.INTERNAL_ERROR.value
        message = str(exc) or type(exc).__name__
        logger.error("Unexpected error in tool call", exc_info=exc)

    return ToolResult(
        payload={"success": False, **context, "error": message, "code": code},
        is_error=True,
    )
