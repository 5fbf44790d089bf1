from __future__ import annotations

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from payline.settings.ledyer_settings import LedyerSettings


class AppSettings(BaseModel):
    """Application settings aggregator."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    ledyer: LedyerSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings; .env is loaded exactly once here."""
    load_dotenv()
    return AppSettings(ledyer=LedyerSettings())
