"""Foundation - error handling and configuration for huelog."""

from __future__ import annotations

__all__ = [
    # Errors
    "ErrorCode", "RenderError", "RenderException", "Result", "Ok", "Err",
    # Config
    "HuelogSettings", "get_settings", "clear_settings_cache",
]


def __getattr__(name: str):
    """Lazy imports so the settings stack loads only when asked for."""
    if name in ("ErrorCode", "RenderError", "RenderException", "Result", "Ok", "Err"):
        from . import errors
        return getattr(errors, name)
    if name in ("HuelogSettings", "get_settings", "clear_settings_cache"):
        from . import config
        return getattr(config, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
