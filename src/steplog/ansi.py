"""
ANSI 256-color styling.

An AnsiColor wraps text in escape sequences when enabled and returns it
untouched otherwise. Level color and emoji tables are read-only mappings
built once at import.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from steplog.records import LogLevel

ANSI_ESC = "\x1b["
ANSI_DEFAULT = f"{ANSI_ESC}0m"


@dataclass(frozen=True)
class AnsiColor:
    """Foreground or background color code plus an enabled flag."""
    fg: Optional[int] = None
    bg: Optional[int] = None
    enabled: bool = False

    @classmethod
    def none(cls) -> "AnsiColor":
        return _NONE

    @classmethod
    def foreground(cls, code: int) -> "AnsiColor":
        return cls(fg=code, enabled=True)

    @classmethod
    def background(cls, code: int) -> "AnsiColor":
        return cls(bg=code, enabled=True)

    def to_fg(self) -> "AnsiColor":
        """Reuse this background code as a foreground color."""
        return AnsiColor.foreground(self.bg) if self.bg is not None else _NONE

    def to_bg(self) -> "AnsiColor":
        """Reuse this foreground code as a background color."""
        return AnsiColor.background(self.fg) if self.fg is not None else _NONE

    @property
    def reset_foreground(self) -> str:
        return f"{ANSI_ESC}39m" if self.enabled else ""

    @property
    def reset_background(self) -> str:
        return f"{ANSI_ESC}49m" if self.enabled else ""

    def __str__(self) -> str:
        if self.fg is not None:
            return f"{ANSI_ESC}38;5;{self.fg}m"
        if self.bg is not None:
            return f"{ANSI_ESC}48;5;{self.bg}m"
        return ""

    def __call__(self, text: str) -> str:
        if not self.enabled:
            return text
        return f"{self}{text}{ANSI_DEFAULT}"

    @staticmethod
    def grey(level: float) -> int:
        """Map 0.0..1.0 onto the 24-step grayscale ramp (232..255)."""
        return 232 + round(min(max(level, 0.0), 1.0) * 23)


_NONE = AnsiColor()

# Foreground palette (xterm 0-15)
BLACK = AnsiColor.foreground(0)
DARK_RED = AnsiColor.foreground(1)
DARK_GREEN = AnsiColor.foreground(2)
DARK_YELLOW = AnsiColor.foreground(3)
DARK_BLUE = AnsiColor.foreground(4)
DARK_MAGENTA = AnsiColor.foreground(5)
DARK_CYAN = AnsiColor.foreground(6)
GRAY = AnsiColor.foreground(7)
DARK_GRAY = AnsiColor.foreground(8)
RED = AnsiColor.foreground(9)
GREEN = AnsiColor.foreground(10)
YELLOW = AnsiColor.foreground(11)
BLUE = AnsiColor.foreground(12)
MAGENTA = AnsiColor.foreground(13)
CYAN = AnsiColor.foreground(14)
WHITE = AnsiColor.foreground(15)

# Background palette
BG_BLACK = AnsiColor.background(0)
BG_RED = AnsiColor.background(1)
BG_GREEN = AnsiColor.background(2)
BG_YELLOW = AnsiColor.background(3)
BG_BLUE = AnsiColor.background(4)
BG_MAGENTA = AnsiColor.background(5)
BG_CYAN = AnsiColor.background(6)
BG_WHITE = AnsiColor.background(7)
BG_BRIGHT_BLACK = AnsiColor.background(8)
BG_BRIGHT_RED = AnsiColor.background(9)
BG_BRIGHT_GREEN = AnsiColor.background(10)
BG_BRIGHT_YELLOW = AnsiColor.background(11)
BG_BRIGHT_BLUE = AnsiColor.background(12)
BG_BRIGHT_MAGENTA = AnsiColor.background(13)
BG_BRIGHT_CYAN = AnsiColor.background(14)
BG_BRIGHT_WHITE = AnsiColor.background(15)


LEVEL_COLORS: Mapping[LogLevel, AnsiColor] = MappingProxyType({
    LogLevel.TRACE: BLUE,
    LogLevel.DEBUG: BLUE,
    LogLevel.INFO: GREEN,
    LogLevel.WARN: YELLOW,
    LogLevel.ERROR: RED,
    LogLevel.FATAL: RED,
})

LEVEL_EMOJIS: Mapping[LogLevel, str] = MappingProxyType({
    LogLevel.TRACE: "🔍",
    LogLevel.DEBUG: "🐛",
    LogLevel.INFO: "💡",
    LogLevel.WARN: "⚠️",
    LogLevel.ERROR: "❌",
    LogLevel.FATAL: "💀",
})


def level_color(level: LogLevel) -> AnsiColor:
    """Color for a level; unmapped levels get no styling."""
    return LEVEL_COLORS.get(level, _NONE)


def level_emoji(level: LogLevel) -> str:
    return LEVEL_EMOJIS.get(level, "")


class AnsiOutput:
    """Shorthand wrappers over the palette."""

    @staticmethod
    def apply(color: AnsiColor, text: str) -> str:
        return color(text)

    @staticmethod
    def green(text: str) -> str:
        return GREEN(text)

    @staticmethod
    def red(text: str) -> str:
        return RED(text)

    @staticmethod
    def yellow(text: str) -> str:
        return YELLOW(text)

    @staticmethod
    def blue(text: str) -> str:
        return BLUE(text)

    @staticmethod
    def magenta(text: str) -> str:
        return MAGENTA(text)

    @staticmethod
    def cyan(text: str) -> str:
        return CYAN(text)

    @staticmethod
    def gray(text: str) -> str:
        return GRAY(text)

    @staticmethod
    def white(text: str) -> str:
        return WHITE(text)

    @staticmethod
    def dark_red(text: str) -> str:
        return DARK_RED(text)

    @staticmethod
    def dark_green(text: str) -> str:
        return DARK_GREEN(text)

    @staticmethod
    def on_background(
        background: AnsiColor, text: str, foreground: AnsiColor | None = None
    ) -> str:
        base = background(text)
        return foreground(base) if foreground is not None else base

    @staticmethod
    def on_red(text: str, fg: AnsiColor = WHITE) -> str:
        return AnsiOutput.on_background(BG_BRIGHT_RED, text, fg)

    @staticmethod
    def on_yellow(text: str, fg: AnsiColor = BLACK) -> str:
        return AnsiOutput.on_background(BG_BRIGHT_YELLOW, text, fg)
