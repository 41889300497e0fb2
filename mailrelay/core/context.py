"""Invocation context management using contextvars.

Every HTTP-triggered function invocation gets a request ID and the name of the
function being run. Both are picked up by the logging processors, so log lines
from the delivery client carry them without passing parameters around.
"""

from contextvars import ContextVar
from typing import Any
from uuid import uuid4


request_id_var: ContextVar[str] = ContextVar("request_id", default="")
function_name_var: ContextVar[str | None] = ContextVar("function_name", default=None)
correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def generate_request_id() -> str:
    """Generate a new unique request ID."""
    return str(uuid4())


def get_request_id() -> str:
    """Get the current request ID."""
    return request_id_var.get()


def set_request_id(request_id: str | None = None) -> str:
    """Set the request ID for the current context.

    Args:
        request_id: Optional request ID. If not provided, generates a new one.

    Returns:
        The request ID that was set.
    """
    rid = request_id or generate_request_id()
    request_id_var.set(rid)
    return rid


def get_function_name() -> str | None:
    """Get the name of the function handling the current invocation."""
    return function_name_var.get()


def set_function_name(name: str | None) -> None:
    """Set the function name (e.g. ``SendMail``) for the current context."""
    function_name_var.set(name)


def get_correlation_id() -> str | None:
    """Get the current correlation ID."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str | None) -> None:
    """Set the correlation ID supplied by the caller."""
    correlation_id_var.set(correlation_id)


def get_context() -> dict[str, Any]:
    """Get all context variables that are set, as a dictionary."""
    context: dict[str, Any] = {}

    request_id = get_request_id()
    if request_id:
        context["request_id"] = request_id

    function_name = get_function_name()
    if function_name:
        context["function"] = function_name

    correlation_id = get_correlation_id()
    if correlation_id:
        context["correlation_id"] = correlation_id

    return context


def clear_context() -> None:
    """Clear all context variables.

    Called at the end of each invocation to prevent leakage between requests.
    """
    request_id_var.set("")
    function_name_var.set(None)
    correlation_id_var.set(None)
