# Core infrastructure
from mailrelay.core.context import (
    clear_context,
    get_context,
    get_correlation_id,
    get_function_name,
    get_request_id,
    set_correlation_id,
    set_function_name,
    set_request_id,
)
from mailrelay.core.logging import configure_structlog, get_logger
from mailrelay.core.middleware import RequestContextMiddleware


__all__ = [
    "RequestContextMiddleware",
    "clear_context",
    "configure_structlog",
    "get_context",
    "get_correlation_id",
    "get_function_name",
    "get_logger",
    "get_request_id",
    "set_correlation_id",
    "set_function_name",
    "set_request_id",
]
