"""Rendering: colors, the options table, and the record renderer."""

from .color import NO_COLOR, AnsiColor, Color, NoColor, Style
from .options import (
    RenderOptions,
    SharedOptions,
    SourceFileMode,
    default_level_colors,
    default_level_tags,
    default_options,
)
from .renderer import Renderer, attr_lines, head_line

__all__ = [
    "NO_COLOR", "AnsiColor", "Color", "NoColor", "Style",
    "RenderOptions", "SharedOptions", "SourceFileMode",
    "default_level_colors", "default_level_tags", "default_options",
    "Renderer", "attr_lines", "head_line",
]
