"""
Authenticated HTTP client for the Ledyer API.

Obtains a bearer token through the client-credentials flow, caches it in a
TokenStore, and sends JSON requests with an Idempotency-Key. Transport
failures and 5xx responses are retried with exponential backoff; 4xx
responses are surfaced immediately.
"""
import base64
import json
import logging
import time
from typing import Any, Callable, Dict, Optional
from uuid import uuid4

import requests

from payline.application.interfaces import IRequestLogSink
from payline.domain.exceptions import (
    AuthenticationError,
    ClientError,
    RequestError,
    ServerError,
    TransportError,
)
from payline.infrastructure.adapters.ledyer.request_logger import (
    LoggingRequestLogSink,
    format_log,
    redact_headers,
)
from payline.infrastructure.adapters.ledyer.token_store import TokenStore
from payline.settings.ledyer_settings import LedyerSettings

logger = logging.getLogger(__name__)

DEFAULT_RETRIES = 4
DEFAULT_DELAY = 0.5
DEFAULT_BACKOFF_FACTOR = 2.0
DEFAULT_TOKEN_EXPIRES_IN = 3600

# Shared by every client that is not handed its own store.
shared_token_store = TokenStore()


class AuthenticatedRequestClient:
    """
    Ledyer API client.

    All methods are synchronous; retry sleeps block the caller.
    """

    def __init__(
        self,
        settings: LedyerSettings,
        token_store: Optional[TokenStore] = None,
        log_sink: Optional[IRequestLogSink] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Credentials, environment and timeouts
            token_store: Token cache (defaults to the process-wide store)
            log_sink: Request log destination (defaults to the "payline.ledyer" logger)
            session: requests session to send through
            sleep: Blocking sleep used between retries
        """
        self._settings = settings
        self._token_store = token_store if token_store is not None else shared_token_store
        self._log_sink = log_sink or LoggingRequestLogSink()
        self._session = session or requests.Session()
        self._sleep = sleep

    # ---------------------------------------------
    # Authentication
    # ---------------------------------------------

    def get_token(self) -> str:
        """
        Return a valid access token, exchanging client credentials if needed.

        Raises:
            AuthenticationError: If the exchange fails or returns no token
        """
        token = self._token_store.get()
        if token:
            return token

        credentials = self._settings.client_credentials()
        basic = base64.b64encode(
            f"{credentials['client_id']}:{credentials['client_secret']}".encode()
        ).decode()
        url = f"{self._settings.auth_base()}oauth/token?grant_type=client_credentials"
        request_args = {
            "method": "POST",
            "headers": {"Authorization": f"Basic {basic}"},
            "timeout": self._settings.token_timeout,
        }

        logger.info(f"[LEDYER] Requesting access token from {self._settings.auth_base()}")
        try:
            body = self.do_request(url, request_args)
        except RequestError as e:
            raise AuthenticationError(
                e.code, e.message, e.context, response_body=e.response_body
            ) from e

        access_token = body.get("access_token") if isinstance(body, dict) else None
        if not access_token:
            raise AuthenticationError(
                "invalid_token_response",
                "Token response did not contain an access_token",
                f"URL: {url}",
                response_body=body,
            )

        self._token_store.set(access_token, body.get("expires_in") or DEFAULT_TOKEN_EXPIRES_IN)
        return access_token

    # ---------------------------------------------
    # Requests
    # ---------------------------------------------

    def get_request_url(self, endpoint: str) -> str:
        return self._settings.api_base() + endpoint.strip("/")

    def get_request_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.get_token()}",
            "Content-Type": "application/json",
        }

    def request(
        self,
        endpoint: str,
        method: str = "POST",
        data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send one API call.

        The Idempotency-Key is generated once per call and reused by its retries.

        Args:
            endpoint: Path relative to the API base, e.g. "v1/orders/abc/capture"
            method: HTTP method
            data: JSON body, ignored for GET

        Returns:
            Parsed JSON response body

        Raises:
            RequestError: Last observed error once retries are exhausted,
                or immediately for non-retryable errors
        """
        method = method.upper()
        request_args: Dict[str, Any] = {
            "method": method,
            "headers": {**self.get_request_headers(), "Idempotency-Key": str(uuid4())},
            "timeout": self._settings.request_timeout,
        }
        if method != "GET" and data:
            request_args["body"] = json.dumps(data)

        return self.do_request(self.get_request_url(endpoint), request_args)

    def do_request(
        self,
        url: str,
        request_args: Dict[str, Any],
        retries: int = DEFAULT_RETRIES,
        delay: float = DEFAULT_DELAY,
        backoff_factor: float = DEFAULT_BACKOFF_FACTOR,
    ) -> Any:
        """
        Send a request, retrying transport failures and 5xx responses.

        Each retry waits `delay` seconds, then the delay is multiplied by
        `backoff_factor`. 4xx responses are never retried.
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                return self._send(url, request_args)
            except RequestError as e:
                if not e.retryable or retries <= 0:
                    if e.retryable:
                        logger.error(
                            f"[LEDYER] {request_args['method']} {url} failed after "
                            f"{attempt} attempt(s): {e}"
                        )
                    raise
                logger.warning(
                    f"[LEDYER] {request_args['method']} {url} failed "
                    f"(attempt {attempt}, code={e.code}). Retrying in {delay}s..."
                )
                self._sleep(delay)
                retries -= 1
                delay *= backoff_factor

    def _send(self, url: str, request_args: Dict[str, Any]) -> Any:
        try:
            response = self._session.request(
                request_args["method"],
                url,
                headers=request_args.get("headers"),
                data=request_args.get("body"),
                timeout=request_args.get("timeout"),
            )
        except requests.RequestException as e:
            return self.process_response(None, request_args, url, transport_error=e)
        return self.process_response(response, request_args, url)

    def process_response(
        self,
        response: Optional[requests.Response],
        request_args: Dict[str, Any],
        url: str,
        transport_error: Optional[Exception] = None,
    ) -> Any:
        """
        Log the exchange and turn the response into a body or an error.

        Returns:
            Parsed JSON body (empty dict for an empty body)

        Raises:
            TransportError: No response was received
            ServerError: Status >= 500
            ClientError: Any other status outside 200-299
        """
        code = response.status_code if response is not None else None
        body = self._parse_body(response)
        self._log_sink.log(
            format_log("", request_args.get("method", ""), "Ledyer request", request_args, body, code),
            self._settings.logging_enabled,
        )

        context = f"URL: {url} - {json.dumps(redact_headers(request_args), default=str)}"

        if transport_error is not None or response is None:
            raise TransportError("http_request_failed", str(transport_error or "No response"), context)

        if code < 200 or code > 299:
            message = self._error_message(body)
            error_cls = ServerError if code >= 500 else ClientError
            raise error_cls(code, message, context, response_body=body)

        if body is None:
            if response.content:
                raise RequestError(code, "Response body is not valid JSON", context)
            return {}
        return body

    @staticmethod
    def _parse_body(response: Optional[requests.Response]) -> Any:
        if response is None or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _error_message(body: Any) -> str:
        if not isinstance(body, dict):
            return ""
        messages = [
            str(error.get("message", ""))
            for error in body.get("errors") or []
            if isinstance(error, dict)
        ]
        return " ".join(m for m in messages if m)
