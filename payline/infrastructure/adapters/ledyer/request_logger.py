"""
Request/response log sink for Ledyer calls.

Entries are written as one JSON line per exchange to the "payline.ledyer"
logger, and only when the logging-enabled setting is on.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from payline.application.interfaces import IRequestLogSink
from payline.infrastructure.logging import get_logger

REDACTED = "[redacted]"


def redact_headers(request_args: Dict[str, Any]) -> Dict[str, Any]:
    headers = request_args.get("headers")
    if not isinstance(headers, dict) or "Authorization" not in headers:
        return request_args
    return {**request_args, "headers": {**headers, "Authorization": REDACTED}}


def format_log(
    order_id: str,
    method: str,
    title: str,
    request_args: Dict[str, Any],
    response: Any,
    code: Any,
) -> Dict[str, Any]:
    """
    Build a log entry for one exchange.

    Args:
        order_id: Provider order id, empty when not tied to an order
        method: HTTP method
        title: Short label for the entry
        request_args: Arguments the request was sent with
        response: Parsed response body (or None)
        code: HTTP status code, or None for transport failures

    Returns:
        JSON-serialisable log entry
    """
    return {
        "id": order_id,
        "type": method,
        "title": title,
        "request": redact_headers(request_args),
        "response": {"body": response, "code": code},
        "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
    }


class LoggingRequestLogSink(IRequestLogSink):
    """IRequestLogSink backed by the standard logging module."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or get_logger("ledyer")

    def log(self, entry: Dict[str, Any], enabled: bool) -> None:
        if not enabled:
            return
        self._logger.info(json.dumps(entry, default=str))
