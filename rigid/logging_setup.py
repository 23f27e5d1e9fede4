"""Logging configuration for rigid."""

import logging
import os
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "rigid"

# Global logging state
_logging_initialized = False
_logging_lock = threading.Lock()

# Library default: stay silent unless the application configures handlers.
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class ContextFormatter(logging.Formatter):
    """Formatter that adds a UTC timestamp and the emitting component."""

    def __init__(self):
        super().__init__(
            fmt=(
                "%(asctime)s.%(msecs)03d [%(component)s] "
                "[%(threadName)s] %(levelname)s - %(message)s"
            ),
            datefmt="%Y-%m-%dT%H:%M:%S",
        )

    def formatTime(self, record, datefmt=None):
        """Format time in UTC."""
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.isoformat()

    def format(self, record):
        """Add the component field to the log record."""
        if not hasattr(record, "component"):
            parts = record.name.split(".")
            if len(parts) >= 2 and parts[0] == ROOT_LOGGER_NAME:
                record.component = parts[1]
            else:
                record.component = "system"

        return super().format(record)


def setup_logging(
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    log_dir: Optional[Path] = None,
    console: bool = True,
) -> logging.Logger:
    """Set up logging for applications that embed rigid.

    Args:
        console_level: Console log level
        file_level: File log level
        log_dir: Directory for a per-run log file; no file is written if None
        console: Whether to enable console logging

    Returns:
        Configured ``rigid`` logger
    """
    global _logging_initialized

    with _logging_lock:
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        if _logging_initialized:
            return logger

        logger.setLevel(logging.DEBUG)
        logger.handlers.clear()
        logger.propagate = False

        formatter = ContextFormatter()

        if console:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(getattr(logging, console_level.upper()))
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        log_file = None
        if log_dir is not None:
            log_dir = Path(log_dir)
            log_dir.mkdir(parents=True, exist_ok=True)

            # Per-run log filename: YYYYMMDD_HHMMSS-PID.log
            now = datetime.now(timezone.utc)
            log_file = log_dir / f"{now.strftime('%Y%m%d_%H%M%S')}-{os.getpid()}.log"

            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setLevel(getattr(logging, file_level.upper()))
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        if not logger.handlers:
            logger.addHandler(logging.NullHandler())

        _logging_initialized = True

        logger.debug("Logging initialized - file: %s", log_file)

        return logger


def reset_logging() -> None:
    """Remove configured handlers so ``setup_logging`` can run again."""
    global _logging_initialized

    with _logging_lock:
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
        logger.addHandler(logging.NullHandler())
        logger.propagate = True
        _logging_initialized = False


def is_logging_initialized() -> bool:
    """Return True once ``setup_logging`` has configured handlers."""
    return _logging_initialized


def get_logger(name: str) -> logging.Logger:
    """Get a logger in the rigid namespace.

    Args:
        name: Component name (e.g., 'core', 'cli')

    Returns:
        Logger instance named ``rigid.<name>``
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
