"""Color strategies: wrap text in ANSI SGR escape sequences, or don't.

Example:
    >>> AnsiColor.of(Style.FG_RED, Style.BOLD).wrap("boom")
    '\\x1b[31;1mboom\\x1b[0m'
    >>> NO_COLOR.wrap("plain")
    'plain'
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol, runtime_checkable

RESET = "\033[0m"


class Style(IntEnum):
    """SGR parameters."""
    BOLD = 1
    FAINT = 2
    ITALIC = 3
    UNDERLINE = 4
    REVERSE = 7

    FG_BLACK = 30
    FG_RED = 31
    FG_GREEN = 32
    FG_YELLOW = 33
    FG_BLUE = 34
    FG_MAGENTA = 35
    FG_CYAN = 36
    FG_WHITE = 37

    BG_BLACK = 40
    BG_RED = 41
    BG_GREEN = 42
    BG_YELLOW = 43
    BG_BLUE = 44
    BG_MAGENTA = 45
    BG_CYAN = 46
    BG_WHITE = 47

    FG_HI_BLACK = 90
    FG_HI_RED = 91
    FG_HI_GREEN = 92
    FG_HI_YELLOW = 93
    FG_HI_BLUE = 94
    FG_HI_MAGENTA = 95
    FG_HI_CYAN = 96
    FG_HI_WHITE = 97


@runtime_checkable
class Color(Protocol):
    """Anything that can decorate a text segment."""

    def wrap(self, text: str) -> str: ...


@dataclass(frozen=True, slots=True)
class NoColor:
    """Identity passthrough."""

    def wrap(self, text: str) -> str:
        return text


@dataclass(frozen=True, slots=True)
class AnsiColor:
    """Wraps text as ESC[<styles>m text ESC[0m."""

    styles: tuple[int, ...]

    @classmethod
    def of(cls, *styles: int) -> AnsiColor:
        return cls(tuple(int(s) for s in styles))

    @property
    def prefix(self) -> str:
        return f"\033[{';'.join(str(s) for s in self.styles)}m"

    def wrap(self, text: str) -> str:
        # Empty segments and style-less colors stay escape-free.
        if not text or not self.styles:
            return text
        return f"{self.prefix}{text}{RESET}"


NO_COLOR: Color = NoColor()


def resolve(color: Color | None) -> Color:
    """Substitute the passthrough for an unset color."""
    return NO_COLOR if color is None else color
