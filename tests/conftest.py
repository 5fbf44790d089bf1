"""Shared fixtures: settings, a scripted requests session and recorded sleeps."""
import json
from typing import Any, List, Optional

import pytest
import requests

from payline.infrastructure.adapters.ledyer import AuthenticatedRequestClient, TokenStore
from payline.settings import LedyerSettings


def make_response(status: int, body: Any = None, raw: Optional[bytes] = None) -> requests.Response:
    """Build a real requests.Response with a JSON (or raw) body."""
    response = requests.Response()
    response.status_code = status
    if raw is not None:
        response._content = raw
    else:
        response._content = json.dumps(body).encode() if body is not None else b""
    response.headers["Content-Type"] = "application/json"
    response.encoding = "utf-8"
    return response


class FakeSession:
    """
    Stand-in for requests.Session.

    Each call pops the next scripted outcome: a Response is returned, an
    exception instance is raised.
    """

    def __init__(self, outcomes: Optional[List[Any]] = None):
        self.outcomes = list(outcomes or [])
        self.calls: List[dict] = []

    def queue(self, *outcomes: Any) -> None:
        self.outcomes.extend(outcomes)

    def request(self, method, url, headers=None, data=None, timeout=None):
        self.calls.append(
            {"method": method, "url": url, "headers": headers, "data": data, "timeout": timeout}
        )
        if not self.outcomes:
            raise AssertionError(f"Unexpected request: {method} {url}")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class RecordingLogSink:
    """IRequestLogSink that keeps entries in memory."""

    def __init__(self):
        self.entries: List[tuple] = []

    def log(self, entry, enabled):
        self.entries.append((entry, enabled))


@pytest.fixture
def ledyer_settings():
    return LedyerSettings(
        client_id="client-id",
        client_secret="client-secret",
        test_mode=True,
        environment="sandbox",
        logging_enabled=True,
    )


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def log_sink():
    return RecordingLogSink()


@pytest.fixture
def token_store():
    return TokenStore()


@pytest.fixture
def client(ledyer_settings, fake_session, sleeps, log_sink, token_store):
    return AuthenticatedRequestClient(
        settings=ledyer_settings,
        token_store=token_store,
        log_sink=log_sink,
        session=fake_session,
        sleep=sleeps.append,
    )


@pytest.fixture
def authenticated_client(client, token_store):
    """Client whose token is already cached, so only data calls hit the session."""
    token_store.set("cached-token", 3600)
    return client


@pytest.fixture
def response_factory():
    return make_response
