"""
Test settings loading.

Verifies environment variables map onto LedyerSettings, environment
selection of the auth/api bases, and building settings from stored
gateway options.
"""
from __future__ import annotations

import pytest

from payline.settings import LedyerSettings, get_app_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_app_settings.cache_clear()
    yield
    get_app_settings.cache_clear()


def test_env_vars_are_mapped(monkeypatch):
    monkeypatch.setenv("LEDYER_CLIENT_ID", "env-id")
    monkeypatch.setenv("LEDYER_CLIENT_SECRET", "env-secret")
    monkeypatch.setenv("LEDYER_TEST_MODE", "true")
    monkeypatch.setenv("LEDYER_ENVIRONMENT", "development")
    monkeypatch.setenv("LEDYER_LOGGING_ENABLED", "1")
    monkeypatch.setenv("LEDYER_REQUEST_TIMEOUT", "15")

    settings = get_app_settings().ledyer

    assert settings.client_credentials() == {"client_id": "env-id", "client_secret": "env-secret"}
    assert settings.test_mode is True
    assert settings.logging_enabled is True
    assert settings.request_timeout == 15.0
    assert settings.token_timeout == 60.0
    assert settings.auth_base() == "https://auth.dev.ledyer.com/"


def test_get_app_settings_is_cached():
    assert get_app_settings() is get_app_settings()


@pytest.mark.parametrize("environment,auth_base,api_base", [
    ("local", "http://host.docker.internal:9001/", "http://host.docker.internal:8000/"),
    ("development", "https://auth.dev.ledyer.com/", "https://api.dev.ledyer.com/"),
    ("local-fe", "https://auth.dev.ledyer.com/", "https://api.dev.ledyer.com/"),
    ("sandbox", "https://auth.sandbox.ledyer.com/", "https://api.sandbox.ledyer.com/"),
    ("anything-else", "https://auth.sandbox.ledyer.com/", "https://api.sandbox.ledyer.com/"),
])
def test_test_mode_environment_selection(environment, auth_base, api_base):
    settings = LedyerSettings(test_mode=True, environment=environment)

    assert settings.auth_base() == auth_base
    assert settings.api_base() == api_base


def test_live_mode_ignores_environment():
    settings = LedyerSettings(test_mode=False, environment="local")

    assert settings.auth_base() == "https://auth.live.ledyer.com/"
    assert settings.api_base() == "https://api.live.ledyer.com/"


def test_gateway_options_prefer_checkout_gateway():
    checkout = {"client_id": "lco", "client_secret": "s1", "testmode": "yes", "logging": "yes"}
    payments = {"client_id": "payments", "client_secret": "s2", "test_mode": "no"}

    settings = LedyerSettings.from_gateway_options(checkout, payments)

    assert settings.client_id == "lco"
    assert settings.test_mode is True
    assert settings.logging_enabled is True
    assert settings.environment == "sandbox"


def test_gateway_options_fall_back_to_payments_gateway():
    payments = {
        "client_id": "payments",
        "client_secret": "s2",
        "test_mode": "yes",
        "development_test_environment": "local",
    }

    settings = LedyerSettings.from_gateway_options({}, payments)

    assert settings.client_id == "payments"
    assert settings.test_mode is True
    assert settings.logging_enabled is False
    assert settings.auth_base() == "http://host.docker.internal:9001/"
