"""
dailylog config: load from env.

Load from env: load_logger_config().
"""
from dailylog.config.logger import LoggerConfig, load_logger_config

__all__ = [
    "LoggerConfig",
    "load_logger_config",
]
