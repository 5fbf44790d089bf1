# Settings package
from payline.settings.app_settings import AppSettings, get_app_settings
from payline.settings.ledyer_settings import LedyerSettings

__all__ = ["AppSettings", "get_app_settings", "LedyerSettings"]
