"""Ledyer order management adapters."""
from .client import AuthenticatedRequestClient, shared_token_store
from .order_mapper import LineFilter, OrderLineMapper
from .request_logger import LoggingRequestLogSink, format_log
from .token_store import TokenStore

__all__ = [
    "AuthenticatedRequestClient",
    "shared_token_store",
    "LineFilter",
    "OrderLineMapper",
    "LoggingRequestLogSink",
    "format_log",
    "TokenStore",
]
