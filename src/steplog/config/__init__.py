"""
Pydantic configuration schemas for steplog.

LogConfig controls what a printer shows and in which order. LoggingConfig
describes a whole dispatch stack (level, strategy, adapters, per-tag
properties) and is what a user writes in YAML.

Design principle: every field has a safe default. An empty YAML document
validates and yields a SIMPLE console logger at INFO.

Usage:
    config = LoggingConfig.from_yaml("logging.yaml")
    logger = Logger.from_config(config)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from steplog.records import LogLevel
from steplog.steps import DEFAULT_STEPS, LogStep, LogType


# ═══════════════════════════════════════════════════════════════════
#  Printer Config
# ═══════════════════════════════════════════════════════════════════

class LogConfig(BaseModel):
    """
    Visibility flags plus the ordered step list.

    Step order alone decides field order in every printer; the flags only
    decide whether a step contributes. Duplicates and omissions in
    `steps` are allowed.
    """
    model_config = ConfigDict(frozen=True)

    show_timestamp: bool = True
    show_time_only: bool = True       # HH:MM:SS only
    show_date_only: bool = True       # enables the DATE step
    show_level: bool = True
    show_tag: bool = True
    show_thread: bool = True
    use_human_readable_time: bool = True
    show_emoji: bool = True
    show_location: bool = True
    steps: tuple[LogStep, ...] = DEFAULT_STEPS

    @field_validator("steps", mode="before")
    @classmethod
    def _coerce_steps(cls, value: Any) -> Any:
        if value is None:
            return DEFAULT_STEPS
        if isinstance(value, (list, tuple)):
            return tuple(
                LogStep.from_value(s) if isinstance(s, str) else s for s in value
            )
        return value


# ═══════════════════════════════════════════════════════════════════
#  Dispatch Config
# ═══════════════════════════════════════════════════════════════════

class AdapterConfig(BaseModel):
    type: str = "terminal"                 # 'terminal', 'buffer'
    min_level: int | str = LogLevel.TRACE.value
    buffer_size: Optional[int] = None      # buffer

    @property
    def level(self) -> LogLevel:
        return LogLevel.from_value(self.min_level)


class LoggingConfig(BaseModel):
    """
    Top-level logging configuration.

    Example:
        level: debug
        type: pretty
        color: false
        config:
          show_emoji: false
          steps: [level, tag, message, error, stacktrace]
        adapters:
          terminal: {type: terminal}
          recent: {type: buffer, buffer_size: 500}
        properties:
          logging.enabled.HttpClient: "false"
    """
    level: int | str = "INFO"
    type: str = LogType.SIMPLE.value
    color: bool = True
    name: str = ""
    config: LogConfig = Field(default_factory=LogConfig)
    adapters: Optional[dict[str, AdapterConfig]] = None
    properties: Optional[dict[str, str]] = None

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: int | str) -> int | str:
        LogLevel.from_value(value)
        return value

    @field_validator("type")
    @classmethod
    def _check_type(cls, value: str) -> str:
        return LogType.from_name(value).value

    @property
    def log_level(self) -> LogLevel:
        return LogLevel.from_value(self.level)

    @property
    def log_type(self) -> LogType:
        return LogType.from_name(self.type)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "LoggingConfig":
        """Load and validate from a YAML file."""
        path = Path(path)
        return cls.from_yaml_string(path.read_text(encoding="utf-8"))

    @classmethod
    def from_yaml_string(cls, yaml_string: str) -> "LoggingConfig":
        """Load and validate from a YAML string."""
        data = yaml.safe_load(yaml_string) or {}
        return cls.model_validate(data)

    @classmethod
    def from_dict(cls, data: dict) -> "LoggingConfig":
        """Load and validate from a dict."""
        return cls.model_validate(data)

    def to_dict(self, exclude_none: bool = True) -> dict:
        return self.model_dump(mode="json", exclude_none=exclude_none)


__all__ = ["LogConfig", "AdapterConfig", "LoggingConfig"]
