"""
Centralized logging setup for the Bookshelf catalog.

Provides console and rotating file output with configuration from config.json,
plus per-logger level overrides (e.g. DEBUG for ``bookshelf.search`` only,
to see each query's phonetic pattern). Uses a guard to prevent multiple
initialization.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict


LOG_FILENAME = "bookshelf.log"

# Third-party loggers that are noisy at INFO and below
QUIET_LOGGERS = {
    "urllib3": "WARNING",
}

_logger_initialized = False


def _level(name: str) -> int:
    return getattr(logging, str(name).upper(), logging.INFO)


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    logs_directory: Path = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    levels: Dict[str, str] = None
) -> None:
    """
    Initialize the root logger with console and optional file handlers.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Format string for log messages.
        logs_directory: Directory for log files. If None, file logging disabled.
        max_file_size_mb: Maximum size of each log file in MB.
        backup_count: Number of backup files to keep.
        levels: Per-logger level overrides, applied after QUIET_LOGGERS.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(_level(log_level))

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if logs_directory:
        logs_directory = Path(logs_directory)
        logs_directory.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            logs_directory / LOG_FILENAME,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    overrides = dict(QUIET_LOGGERS)
    overrides.update(levels or {})
    for name, level in overrides.items():
        logging.getLogger(name).setLevel(_level(level))

    _logger_initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Automatically initializes logging from config on first call. When no
    config can be found (e.g. a library import outside the project), console
    logging with defaults is used instead.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        Configured Logger instance.
    """
    if not _logger_initialized:
        from .config_loader import get_config
        from .exceptions import ConfigurationError

        try:
            config = get_config()
        except ConfigurationError:
            setup_logging()
        else:
            setup_logging(
                log_level=config.logging.level,
                log_format=config.logging.format,
                logs_directory=config.paths.logs_directory,
                max_file_size_mb=config.logging.max_file_size_mb,
                backup_count=config.logging.backup_count,
                levels=config.logging.levels
            )

    return logging.getLogger(name)


if __name__ == "__main__":
    setup_logging(log_level="INFO", levels={"bookshelf.search": "DEBUG"})

    get_logger("bookshelf.search.phonetic_compiler").debug("Query: 'aranyak' -> phonetic pattern shown")
    get_logger("bookshelf.database").debug("Hidden at INFO")
    get_logger("bookshelf.database").info("Info message")
