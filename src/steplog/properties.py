"""
Process-wide logging properties.

A flat key/value registry consulted by tag-bound loggers before they
emit. Recognized keys:

    logging.enabled.<tag>   "false" silences the tag entirely
    logging.level.<tag>     level name; records below it are dropped
"""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Mapping, Optional

from steplog.records import LogLevel

ENABLED_PREFIX = "logging.enabled."
LEVEL_PREFIX = "logging.level."


class LogProperties:
    """Singleton key/value store for per-tag logging switches."""

    _instance: Optional["LogProperties"] = None
    _lock = threading.Lock()

    def __init__(self) -> None:
        self._props: dict[str, str] = {}
        self._props_lock = threading.Lock()

    @classmethod
    def instance(cls) -> "LogProperties":
        """Get or create the singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton. For testing only."""
        with cls._lock:
            cls._instance = None

    def set_property(self, key: str, value: str, overwrite: bool = True) -> None:
        with self._props_lock:
            if overwrite or key not in self._props:
                self._props[key] = str(value)

    def set_properties(self, values: Mapping[str, str], overwrite: bool = True) -> None:
        for key, value in values.items():
            self.set_property(key, value, overwrite=overwrite)

    def get_property(self, key: str) -> str | None:
        return self._props.get(key)

    def as_dict(self) -> Mapping[str, str]:
        """Read-only snapshot."""
        with self._props_lock:
            return MappingProxyType(dict(self._props))

    def clear(self) -> None:
        with self._props_lock:
            self._props.clear()

    # ── Tag gates ─────────────────────────────────────────────────

    def is_tag_enabled(self, tag: str) -> bool:
        value = self.get_property(f"{ENABLED_PREFIX}{tag}")
        return value is None or value.strip().lower() != "false"

    def tag_level(self, tag: str) -> LogLevel | None:
        """Minimum level configured for a tag, or None. Unknown names are ignored."""
        value = self.get_property(f"{LEVEL_PREFIX}{tag}")
        if value is None:
            return None
        try:
            return LogLevel.from_name(value)
        except ValueError:
            return None

    def allows(self, tag: str, level: LogLevel) -> bool:
        if not self.is_tag_enabled(tag):
            return False
        minimum = self.tag_level(tag)
        return minimum is None or level >= minimum
