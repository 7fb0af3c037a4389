"""
Process-wide wiring: attach the active destination to the root logger and run rotation.

The module keeps one default ActiveDestination/RotationScheduler pair for
applications that want the "set root dir, initialize, log anywhere" flow.
Code that prefers explicit ownership can build its own pair instead.
"""
from __future__ import annotations

import logging
import sys
import threading
from typing import Optional

from dailylog.config.logger import LoggerConfig
from dailylog.core.exceptions import ConfigurationError
from dailylog.core.logger.destination import ActiveDestination
from dailylog.core.logger.rotation import RotationScheduler
from dailylog.core.logger.structured import StructuredLogger

# Set by set_root_dir(); wins over LOG_DIR when no explicit config is passed
_root_dir: Optional[str] = None
_destination: Optional[ActiveDestination] = None
_attached_to: Optional[logging.Logger] = None
_scheduler: Optional[RotationScheduler] = None
_state_lock = threading.Lock()


def set_root_dir(path: str) -> None:
    """Set the root log directory. Only allowed before initialization."""
    global _root_dir
    if not isinstance(path, str) or not path.strip():
        raise ConfigurationError("root log directory must be a non-empty string")
    with _state_lock:
        if _scheduler is not None:
            raise ConfigurationError(
                "set_root_dir() must be called before the log destination is initialized",
                details={"root_dir": path},
            )
        _root_dir = path


def _resolve_config(config: Optional[LoggerConfig]) -> LoggerConfig:
    if config is not None:
        return config
    if _root_dir is not None:
        return LoggerConfig.from_env(root_dir=_root_dir)
    return LoggerConfig.from_env()


def configure(config: Optional[LoggerConfig] = None) -> ActiveDestination:
    """
    Attach a fresh ActiveDestination to the configured root logger.
    If config is None, uses LoggerConfig.from_env() (root dir from set_root_dir() if set).
    Existing handlers on that logger are removed to avoid double printing.
    Nothing is written until a rotation installs a file (see start()/initialize()).
    """
    global _destination, _attached_to
    config = _resolve_config(config)
    shutdown()

    destination = ActiveDestination(config.root_dir)
    root = logging.getLogger(config.root_name)
    root.setLevel(config.levelno)
    root.handlers.clear()
    root.addHandler(destination)
    if config.root_name:
        root.propagate = False

    with _state_lock:
        _destination, _attached_to = destination, root
    return destination


def _build_scheduler(config: LoggerConfig, destination: ActiveDestination) -> RotationScheduler:
    stream = sys.stderr if config.console_stream == "stderr" else sys.stdout
    return RotationScheduler(
        destination,
        console=config.console,
        console_stream=stream,
        encoding=config.encoding,
    )


def start(config: Optional[LoggerConfig] = None) -> RotationScheduler:
    """
    Configure, open today's file and keep rotating in a background thread.

    Raises RotationError when today's file cannot be opened; nothing is
    installed in that case.
    """
    global _scheduler
    config = _resolve_config(config)
    destination = configure(config)
    scheduler = _build_scheduler(config, destination)
    with _state_lock:
        _scheduler = scheduler
    try:
        scheduler.start()
    except Exception:
        # detach so the failure reaches the last-resort handler
        shutdown()
        raise
    return scheduler


def initialize(config: Optional[LoggerConfig] = None) -> None:
    """
    Configure and run the rotation scheduler in the calling thread; blocks
    until shutdown(). Launch it as a background activity of the application.
    """
    global _scheduler
    config = _resolve_config(config)
    destination = configure(config)
    scheduler = _build_scheduler(config, destination)
    with _state_lock:
        _scheduler = scheduler
    try:
        scheduler.run()
    except Exception:
        # detach so the failure reaches the last-resort handler
        shutdown()
        raise


def shutdown() -> None:
    """Stop rotation and close the current file. Safe to call more than once."""
    global _destination, _scheduler, _attached_to
    with _state_lock:
        scheduler, destination, attached_to = _scheduler, _destination, _attached_to
        _scheduler = _destination = _attached_to = None
    if scheduler is not None:
        scheduler.stop()
    if destination is not None:
        if attached_to is not None:
            attached_to.removeHandler(destination)
        destination.close()


def get_destination() -> Optional[ActiveDestination]:
    return _destination


def get_scheduler() -> Optional[RotationScheduler]:
    return _scheduler


def get_logger(name: str, **attrs: object) -> StructuredLogger:
    """
    Return a key/value logger for the given name. Records reach the daily files
    once start() or initialize() has run.
    """
    return StructuredLogger(logging.getLogger(name)).bind(**attrs)
