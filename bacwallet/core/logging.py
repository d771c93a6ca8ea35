"""
Logging for bacwallet

The "bacwallet" logger owns the console handler. Module loggers are its children and propagate to it, so the level
of the whole package is set in one place with set_log_level. Secret material is never passed to a logger.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from .formats import LOGGING

__all__ = ["get_logger", "set_log_level", "add_log_file"]


def _package_logger() -> logging.Logger:
    package_logger = logging.getLogger(LOGGING.ROOT_NAME)

    # Console handler is attached once
    if not package_logger.handlers:
        package_logger.setLevel(LOGGING.DEFAULT_LEVEL)
        console_handler = logging.StreamHandler(stream=sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOGGING.FORMAT))
        package_logger.addHandler(console_handler)
    return package_logger


def get_logger(name: str, log_level: Optional[str] = None, log_file: Optional[Path | str] = None,
               format_string: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the bacwallet package logger.

    Args:
        name: Logger name (typically __name__ from calling module). Names outside the package are nested under it
        log_level: Optional level for this logger only (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file for persistent logging
        format_string: Optional format for the log file

    Returns:
        Configured logger instance
    """
    root_name = _package_logger().name
    if name != root_name and not name.startswith(f"{root_name}."):
        name = f"{root_name}.{name}"

    logger = logging.getLogger(name)
    if log_level:
        logger.setLevel(log_level.upper())
    if log_file:
        add_log_file(log_file, logger, format_string)
    return logger


def add_log_file(log_file: Path | str, logger: Optional[logging.Logger] = None,
                 format_string: Optional[str] = None) -> logging.Logger:
    """Attach a file handler, once per file, to the given logger or the package logger"""
    logger = logger or _package_logger()
    log_file = Path(log_file)

    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == log_file.absolute():
            return logger

    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(logging.Formatter(format_string or LOGGING.FORMAT))
    logger.addHandler(file_handler)
    return logger


def set_log_level(log_level: str):
    """Set the level of every bacwallet logger that has no level of its own"""
    _package_logger().setLevel(log_level.upper())
