"""
Daily log destination: colored terminal + plain daily file, rotated at local midnight.

Usage:
    from dailylog.core.logger import get_logger, set_root_dir, start

    set_root_dir("/var/log/myapp")   # optional, before start(); default "logs" or LOG_DIR
    start()                          # opens <root>/<YYYY>/<MM>/<DD>.txt, rotates in background

    log = get_logger(__name__)
    log.info("Application started", version="1.0.0")
    # [2024-03-01 09:15:02.123] INFO Application started version=1.0.0

    # Or block in a thread of your own
    threading.Thread(target=initialize, daemon=True).start()

    # Build handlers on demand for custom loggers
    from dailylog.core.logger import FanoutHandler, build_console_sink, build_file_sink
    custom = logging.getLogger("custom")
    custom.addHandler(FanoutHandler(build_console_sink(), build_file_sink(open("custom.txt", "a"))))
"""
from dailylog.core.logger.ansi import strip_ansi
from dailylog.core.logger.destination import ActiveDestination, DatePartition, ReadWriteLock
from dailylog.core.logger.formatters import RecordFormatter, format_record
from dailylog.core.logger.handlers import (
    FanoutHandler,
    SinkHandler,
    build_console_sink,
    build_fanout,
    build_file_sink,
)
from dailylog.core.logger.rotation import RotationScheduler
from dailylog.core.logger.setup import (
    configure,
    get_destination,
    get_logger,
    get_scheduler,
    initialize,
    set_root_dir,
    shutdown,
    start,
)
from dailylog.core.logger.structured import StructuredLogger

__all__ = [
    "strip_ansi",
    "RecordFormatter",
    "format_record",
    "SinkHandler",
    "FanoutHandler",
    "build_console_sink",
    "build_file_sink",
    "build_fanout",
    "ActiveDestination",
    "DatePartition",
    "ReadWriteLock",
    "RotationScheduler",
    "StructuredLogger",
    "configure",
    "start",
    "initialize",
    "shutdown",
    "set_root_dir",
    "get_logger",
    "get_destination",
    "get_scheduler",
]
