"""
dailylog.config.logger – logging destination config (dataclass + validators).

Env vars: LOG_DIR, LOG_LEVEL, LOG_ROOT_NAME, LOG_CONSOLE, LOG_CONSOLE_STREAM, LOG_ENCODING.
"""
from __future__ import annotations

import codecs
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dailylog.core.exceptions import ConfigurationError

CONSOLE_STREAMS = ("stdout", "stderr")

_TRUE = ("1", "true", "yes")


def _validate_root_dir(root_dir: str) -> str:
    if not isinstance(root_dir, str) or not root_dir.strip():
        raise ConfigurationError("root_dir must be a non-empty string")
    return root_dir


def _validate_level(level: str) -> str:
    if not isinstance(level, str) or not isinstance(
        logging.getLevelName(level.upper()), int
    ):
        raise ConfigurationError(f"level must be a logging level name, got {level!r}")
    return level.upper()


def _validate_encoding(encoding: str) -> str:
    try:
        codecs.lookup(encoding)
    except (LookupError, TypeError) as exc:
        raise ConfigurationError(f"unknown encoding {encoding!r}", cause=exc) from exc
    return encoding


@dataclass(frozen=True)
class LoggerConfig:
    """
    Configuration for the daily log destination.

    All fields are validated on construction. Use LoggerConfig.from_env()
    to build from environment variables.
    """

    root_dir: str = "logs"
    """Root of the <root>/<YYYY>/<MM>/<DD>.txt tree."""

    level: str = "DEBUG"
    """Level set on the logger the destination is attached to."""

    root_name: str = ""
    """Logger the destination is attached to ("" = root logger)."""

    console: bool = True
    """Also write colored lines to the terminal."""

    console_stream: str = "stdout"
    """Terminal stream: stdout or stderr."""

    encoding: str = "utf-8"
    """Encoding of the daily files."""

    def __post_init__(self) -> None:
        _validate_root_dir(self.root_dir)
        object.__setattr__(self, "level", _validate_level(self.level))
        if not isinstance(self.root_name, str):
            raise ConfigurationError("root_name must be a string")
        if not isinstance(self.console, bool):
            raise ConfigurationError("console must be a boolean")
        if self.console_stream not in CONSOLE_STREAMS:
            raise ConfigurationError(
                f"console_stream must be one of {CONSOLE_STREAMS}, got {self.console_stream!r}"
            )
        _validate_encoding(self.encoding)

    @property
    def levelno(self) -> int:
        return logging.getLevelName(self.level)

    @classmethod
    def from_env(cls, **overrides: object) -> LoggerConfig:
        """
        Build config from environment variables.

        Env:
            LOG_DIR             – default logs
            LOG_LEVEL           – default DEBUG
            LOG_ROOT_NAME       – default "" (root logger)
            LOG_CONSOLE         – "1" / "true" / "yes" → True (default True)
            LOG_CONSOLE_STREAM  – stdout | stderr (default stdout)
            LOG_ENCODING        – default utf-8

        Overrides (keyword args) take precedence over env.
        """
        _env = {
            "root_dir": ("LOG_DIR", "logs"),
            "level": ("LOG_LEVEL", "DEBUG"),
            "root_name": ("LOG_ROOT_NAME", ""),
            "console_stream": ("LOG_CONSOLE_STREAM", "stdout"),
            "encoding": ("LOG_ENCODING", "utf-8"),
        }

        def _str(attr: str) -> str:
            v = overrides.get(attr)
            if v is not None:
                return str(v)
            var, default = _env[attr]
            return os.environ.get(var) or default

        def _bool(attr: str, var: str, default: bool) -> bool:
            v = overrides.get(attr)
            if v is not None:
                return bool(v) if not isinstance(v, str) else v.lower() in _TRUE
            raw = os.environ.get(var, "").strip().lower()
            return raw in _TRUE if raw else default

        return cls(
            root_dir=_str("root_dir"),
            level=_str("level"),
            root_name=_str("root_name"),
            console=_bool("console", "LOG_CONSOLE", True),
            console_stream=_str("console_stream"),
            encoding=_str("encoding"),
        )

    def with_overrides(
        self,
        *,
        root_dir: Optional[str] = None,
        level: Optional[str] = None,
        root_name: Optional[str] = None,
        console: Optional[bool] = None,
        console_stream: Optional[str] = None,
        encoding: Optional[str] = None,
    ) -> LoggerConfig:
        """Return a new config with the given overrides (for immutability)."""
        return LoggerConfig(
            root_dir=root_dir if root_dir is not None else self.root_dir,
            level=level if level is not None else self.level,
            root_name=root_name if root_name is not None else self.root_name,
            console=console if console is not None else self.console,
            console_stream=console_stream or self.console_stream,
            encoding=encoding or self.encoding,
        )


def load_logger_config(**overrides: object) -> LoggerConfig:
    """
    Load and validate logger config from environment (with optional overrides).

    Returns:
        Validated LoggerConfig. Raises ConfigurationError on invalid env/values.
    """
    return LoggerConfig.from_env(**overrides)
