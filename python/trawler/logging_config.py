"""
Logging configuration for Trawler.

Library modules only ever call logging.getLogger("trawler.<area>"); handlers
are installed by the host through setup_logging().

Language servers speaking LSP over stdio MUST NOT log to stdout, so the
default is file-only: .trawler/logs/trawler-YYYY-MM-DD.log (new file each day).
Console logging to stderr can be enabled with console=True.
"""

import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from trawler.config import TrawlerConfig

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class FlushingHandler(logging.handlers.TimedRotatingFileHandler):
    """Handler that flushes after every emit for immediate visibility."""

    def emit(self, record):
        super().emit(record)
        self.flush()


def setup_logging(
    log_dir: Optional[Path] = None,
    level: Optional[Union[int, str]] = None,
    backup_count: int = 30,  # Keep 30 days of logs
    console: bool = False,
) -> logging.Logger:
    """
    Set up file-based logging for Trawler with daily rotation.

    Safe to call more than once: existing handlers are reused, never duplicated.

    Args:
        log_dir: Directory for log files (default: .trawler/logs)
        level: Logging level (default: TrawlerConfig.from_env().log_level,
               i.e. TRAWLER_LOG_LEVEL or INFO)
        backup_count: Number of daily backup files to keep (default: 30 days)
        console: If True, also log to stderr

    Returns:
        Configured "trawler" logger
    """
    if level is None:
        level = TrawlerConfig.from_env().log_level
    if log_dir is None:
        log_dir = Path.cwd() / ".trawler" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("trawler")
    logger.setLevel(level)

    has_file_handler = any(isinstance(h, FlushingHandler) for h in logger.handlers)
    has_console_handler = any(
        type(h) is logging.StreamHandler and h.stream is sys.stderr
        for h in logger.handlers
    )

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if not has_file_handler:
        log_file = log_dir / f"trawler-{datetime.now().strftime('%Y-%m-%d')}.log"
        file_handler = FlushingHandler(
            log_file,
            when="midnight",
            interval=1,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.info(f"Logging initialized: {log_file} (level {logging.getLevelName(logger.level)})")

    if console and not has_console_handler:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str = "trawler") -> logging.Logger:
    """Get a Trawler logger instance."""
    return logging.getLogger(name)
