from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

LIVE_AUTH_BASE = "https://auth.live.ledyer.com/"
LIVE_API_BASE = "https://api.live.ledyer.com/"

# environment -> (auth base, api base), used only in test mode
TEST_BASES = {
    "local": ("http://host.docker.internal:9001/", "http://host.docker.internal:8000/"),
    "development": ("https://auth.dev.ledyer.com/", "https://api.dev.ledyer.com/"),
    "local-fe": ("https://auth.dev.ledyer.com/", "https://api.dev.ledyer.com/"),
}
SANDBOX_BASES = ("https://auth.sandbox.ledyer.com/", "https://api.sandbox.ledyer.com/")


class LedyerSettings(BaseSettings):
    """
    Ledyer credentials and environment selection.

    Loaded from environment / .env with prefix LEDYER_*, e.g.
    LEDYER_CLIENT_ID, LEDYER_TEST_MODE, LEDYER_ENVIRONMENT.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDYER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    client_id: str = ""
    client_secret: str = ""
    test_mode: bool = False
    environment: str = "sandbox"
    logging_enabled: bool = False

    # Per-attempt timeouts in seconds
    request_timeout: float = 10.0
    token_timeout: float = 60.0

    def _bases(self) -> tuple[str, str]:
        if not self.test_mode:
            return LIVE_AUTH_BASE, LIVE_API_BASE
        return TEST_BASES.get(self.environment, SANDBOX_BASES)

    def auth_base(self) -> str:
        return self._bases()[0]

    def api_base(self) -> str:
        return self._bases()[1]

    def client_credentials(self) -> Dict[str, str]:
        return {"client_id": self.client_id, "client_secret": self.client_secret}

    @classmethod
    def from_gateway_options(
        cls,
        primary: Optional[Mapping[str, Any]],
        fallback: Optional[Mapping[str, Any]] = None,
    ) -> "LedyerSettings":
        """
        Build settings from stored gateway options.

        The checkout gateway's options win; the payments gateway's options are
        used only when the checkout gateway has none. Checkbox values use the
        shop's "yes"/"no" strings.
        """
        options = dict(primary or {}) or dict(fallback or {})
        test_mode = options.get("testmode", options.get("test_mode", "no"))

        values: Dict[str, Any] = {
            "client_id": options.get("client_id", ""),
            "client_secret": options.get("client_secret", ""),
            "test_mode": test_mode or "no",
            "environment": options.get("development_test_environment") or "sandbox",
            "logging_enabled": options.get("logging") or "no",
        }
        if options.get("request_timeout"):
            values["request_timeout"] = options["request_timeout"]
        return cls(**values)
