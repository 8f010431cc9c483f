"""Environment-based configuration using pydantic-settings.

Loads the flat rendering options from HUELOG_* variables (and a .env file)
and turns them into a RenderOptions table.

Example:
    >>> from huelog.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.source_file_mode
    'short'

    # Or with environment variables:
    # HUELOG_TIME_FORMAT="%H:%M:%S"
    # HUELOG_SOURCE_FILE_MODE=medium
    # NO_COLOR=1
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import AliasChoices, Field, NonNegativeInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from ...render.options import RenderOptions

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "WARNING": 30, "ERROR": 40}


class HuelogSettings(BaseSettings):
    """Root settings for huelog.

    Example environment variables:
        HUELOG_LEVEL=DEBUG
        HUELOG_SOURCE_FILE_LENGTH=24
        HUELOG_QUOTE_VALUES=false
    """

    model_config = SettingsConfigDict(
        env_prefix="HUELOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
        populate_by_name=True,
    )

    level: int = Field(default=20, description="Minimum level rendered (name or number)")
    time_format: str = Field(default="%Y-%m-%d %H:%M:%S", description="strftime pattern, empty to omit")
    source_file_mode: Literal["nop", "short", "medium", "long"] = "short"
    source_file_length: NonNegativeInt | None = Field(default=None, description="Max source segment length")
    quote_values: bool = True
    level_width: Annotated[int, Field(ge=0, le=32)] = 5
    indent: str = "  "
    no_color: bool = Field(
        default=False,
        validation_alias=AliasChoices("HUELOG_NO_COLOR", "NO_COLOR"),
        description="Disable every color",
    )

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, v: object) -> object:
        """Accept level names as well as numbers."""
        if isinstance(v, str) and not v.strip().lstrip("-").isdigit():
            name = v.strip().upper()
            if name not in _LEVELS:
                raise ValueError(f"Unknown level: {v}. Use one of {', '.join(_LEVELS)} or a number")
            return _LEVELS[name]
        return v

    @field_validator("source_file_mode", mode="before")
    @classmethod
    def _normalize_mode(cls, v: object) -> object:
        """Accept 'SHORT', 'short_file', 'ShortFile' style spellings."""
        if isinstance(v, str):
            return v.strip().lower().replace("_file", "").replace("file", "")
        return v

    @field_validator("no_color", mode="before")
    @classmethod
    def _present_means_true(cls, v: object) -> object:
        """NO_COLOR convention: any non-empty value disables color."""
        if isinstance(v, str):
            flag = v.strip().lower()
            return bool(flag) and flag not in ("0", "false", "no", "off")
        return v

    def to_options(self) -> RenderOptions:
        """Build a RenderOptions table from these settings."""
        from ...render.options import RenderOptions, SourceFileMode

        modes = {
            "nop": SourceFileMode.NOP,
            "short": SourceFileMode.SHORT_FILE,
            "medium": SourceFileMode.MEDIUM_FILE,
            "long": SourceFileMode.LONG_FILE,
        }
        opts = RenderOptions(
            level=self.level,
            level_width=self.level_width,
            time_format=self.time_format,
            source_file_mode=modes[self.source_file_mode],
            source_file_length=self.source_file_length,
            quote_values=self.quote_values,
            indent=self.indent,
        )
        return opts.without_colors() if self.no_color else opts


@lru_cache(maxsize=1)
def get_settings() -> HuelogSettings:
    """Get the global settings instance (cached)."""
    return HuelogSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    The next get_settings() call reloads from the environment.
    """
    get_settings.cache_clear()
