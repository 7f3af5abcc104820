"""
Logging configuration for swapfeed.

Provides consistent logging across all modules with configurable verbosity.
"""

import logging
import sys
from pathlib import Path

# Default log format
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Shorter format for console
CONSOLE_FORMAT = "%(levelname)-8s | %(message)s"

# Root namespace shared by every module logger
ROOT_LOGGER_NAME = "swapfeed"

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}


def setup_logging(
    level: int = logging.INFO,
    log_file: Path | None = None,
    verbose: bool = False,
) -> None:
    """
    Configure logging for the application.

    Console output goes to stderr so that command results printed on
    stdout stay machine-readable.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional path to log file
        verbose: If True, use DEBUG level and detailed format
    """
    if verbose:
        level = logging.DEBUG
        console_format = LOG_FORMAT
    else:
        console_format = CONSOLE_FORMAT

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    # Remove existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(console_format, LOG_DATE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        root_logger.addHandler(file_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Usage:
        from utils.logging import get_logger
        logger = get_logger(__name__)

        logger.info("Fetched price for %s", pair)
        logger.debug("GET %s params=%s", url, params)

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]
