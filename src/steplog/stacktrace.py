"""
Call-stack extraction.

Traces are plain text, one frame per line, in the form

    #<index>  <function> (<path>:<line>:<column>)

Lines that do not match are dropped: parsing is best-effort and never
raises. Frames whose path starts with an excluded prefix are filtered out
before the frame budget is applied.
"""

from __future__ import annotations

import re
import sys
import traceback
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import Iterable, NamedTuple, Optional, Sequence

# Frame budgets: non-error records show fewer frames than error records
DEFAULT_METHOD_COUNT = 2
DEFAULT_ERROR_METHOD_COUNT = 8

FRAME_PATTERN = re.compile(r"#\d+\s+(.+?) \((.+?):(\d+):(\d+)\)")

DEFAULT_EXCLUDE_PATHS: tuple[str, ...] = (
    str(Path(__file__).resolve().parent),
    "<frozen ",
)


class Frame(NamedTuple):
    """One parsed line of a trace. Lives only inside an extraction call."""
    raw: str
    function: str
    path: str
    line: int
    column: int


@dataclass(frozen=True)
class Location:
    """Code location of the nearest caller frame."""
    function: str
    path: str
    line: int
    column: int

    @property
    def detail(self) -> str:
        return f"{self.function} ({self.path}:{self.line}:{self.column})"

    @property
    def summary(self) -> str:
        return f"{_basename(self.path)}:{self.line}"

    def __str__(self) -> str:
        return f"{self.detail}\n{self.summary}"


def parse_frame(line: str) -> Frame | None:
    match = FRAME_PATTERN.search(line)
    if match is None:
        return None
    function, path, lineno, column = match.groups()
    return Frame(line.strip(), function, path, int(lineno), int(column))


def parse_frames(trace: str | None) -> list[Frame]:
    """Parse every recognizable frame; anything else is silently skipped."""
    if not trace:
        return []
    frames = []
    for line in trace.splitlines():
        frame = parse_frame(line)
        if frame is not None:
            frames.append(frame)
    return frames


def is_excluded(frame: Frame, exclude_paths: Iterable[str]) -> bool:
    return any(frame.path.startswith(prefix) for prefix in exclude_paths)


def format_stack_trace(
    trace: str | None,
    method_count: int,
    *,
    exclude_paths: Sequence[str] = DEFAULT_EXCLUDE_PATHS,
    begin_index: int = 0,
) -> str | None:
    """
    Filter and truncate a trace.

    Excluded frames are dropped first, then `begin_index` frames are
    skipped and at most `method_count` of the remainder are kept.
    Returns the surviving frame lines joined by newlines, or None when
    nothing survives.
    """
    if method_count <= 0:
        return None
    frames = [f for f in parse_frames(trace) if not is_excluded(f, exclude_paths)]
    kept = frames[max(begin_index, 0):][:method_count]
    if not kept:
        return None
    return "\n".join(frame.raw for frame in kept)


def extract_location(
    trace: str | None,
    exclude_paths: Sequence[str] = DEFAULT_EXCLUDE_PATHS,
) -> Location | None:
    """Nearest non-excluded frame of `trace`, or None. Never raises."""
    try:
        for frame in parse_frames(trace):
            if not is_excluded(frame, exclude_paths):
                return Location(frame.function, frame.path, frame.line, frame.column)
    except (TypeError, ValueError, AttributeError):
        return None
    return None


# ── Capturing Python stacks ──────────────────────────────────────────

def format_frames(frames: Iterable[traceback.FrameSummary]) -> str:
    """Render frame summaries, innermost first, in the recognized format."""
    lines = []
    for index, summary in enumerate(frames):
        column = (getattr(summary, "colno", None) or 0) + 1
        lines.append(
            f"#{index:<6} {summary.name} ({summary.filename}:{summary.lineno}:{column})"
        )
    return "\n".join(lines)


def capture_stack(skip: int = 0, limit: Optional[int] = None) -> str:
    """
    Capture the caller's stack as trace text.

    `skip` drops that many additional innermost frames beyond the
    caller of this function.
    """
    frame = sys._getframe(1 + skip)
    summaries = traceback.extract_stack(frame, limit=limit)
    return format_frames(reversed(summaries))


def format_traceback(tb: TracebackType) -> str:
    """Render an exception traceback, innermost (raise site) first."""
    return format_frames(reversed(traceback.extract_tb(tb)))


def _basename(path: str) -> str:
    return re.split(r"[\\/]", path)[-1]
