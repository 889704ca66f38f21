"""Configuration for Santa Rush."""

from santa_rush.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
