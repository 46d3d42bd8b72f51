"""
Name: Tool Call Context (ContextVars)

Responsibilities:
  - Store call-scoped data (request_id, tool name)
  - Provide async-safe context without parameter passing
  - Enable structured logging with call correlation

Collaborators:
  - tools.py: Sets context at the start of each tool call
  - logger.py: Reads context for log enrichment

Constraints:
  - Only primitive types (str) for safety
  - Default empty string (never None) for JSON serialization
"""

from contextvars import ContextVar

# R: Call identifier (UUID) - set per tool invocation
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# R: Name of the tool being executed
tool_name_var: ContextVar[str] = ContextVar("tool", default="")


def get_context_dict() -> dict:
    """
    R: Get current context as dict for log enrichment.

    Returns:
        Dict with non-empty context values only
    """
    ctx = {}

    if val := request_id_var.get():
        ctx["request_id"] = val
    if val := tool_name_var.get():
        ctx["tool"] = val

    return ctx


def clear_context() -> None:
    """R: Reset all context vars (called at the end of a tool call)."""
    request_id_var.set("")
    tool_name_var.set("")
