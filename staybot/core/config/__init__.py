"""Configuration package."""

from .settings import StayBotSettings, get_settings, reset_settings

__all__ = ["StayBotSettings", "get_settings", "reset_settings"]
