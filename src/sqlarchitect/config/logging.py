"""Logging configuration for SQL Architect.

All loggers live under the ``sqlarchitect`` namespace. Console output goes to
stderr so SQL printed on stdout can be piped without log lines mixed in.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO
from .settings import get_settings

ROOT_LOGGER_NAME = "sqlarchitect"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, format_string: str) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(handler)


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    (Re)configure the package logger.

    Args:
        level: Logging level name; defaults to the LOG_LEVEL setting
        log_file: Extra UTF-8 file destination; defaults to the LOG_FILE setting
        format_string: Record format; defaults to LOG_FORMAT
        stream: Console stream; defaults to sys.stderr

    Returns:
        The configured ``sqlarchitect`` logger
    """
    settings = get_settings()
    numeric_level = getattr(logging, (level or settings.log_level).upper())
    log_file = log_file or settings.log_file
    format_string = format_string or LOG_FORMAT

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    _attach(logger, logging.StreamHandler(stream or sys.stderr), numeric_level, format_string)
    if log_file:
        _attach(logger, logging.FileHandler(log_file, encoding="utf-8"), numeric_level, format_string)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a module, namespaced under ``sqlarchitect``.

    Configures logging with the current settings the first time it is needed.
    """
    if not logging.getLogger(ROOT_LOGGER_NAME).handlers:
        setup_logging()
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
