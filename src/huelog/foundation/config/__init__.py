"""Configuration management using pydantic-settings."""

from .settings import HuelogSettings, clear_settings_cache, get_settings

__all__ = ["HuelogSettings", "clear_settings_cache", "get_settings"]
