"""
Logging infrastructure for zdoc.

Every module obtains its logger through :func:`get_logger` using a dotted
name under the ``zdoc`` namespace (``zdoc.processors.lua_annotator`` and so
on). The command line configures the ``zdoc`` root logger once with
:func:`setup_logger`; child loggers then propagate to it.

Examples:
    >>> from zdoc.utils.logger import setup_logger
    >>> logger = setup_logger("zdoc", level="DEBUG", log_file=Path("logs/zdoc.log"))
    >>> logger.info("Annotating lua files")
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from .path_utils import ensure_directory

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
SIMPLE_FORMAT = "[%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Rotation limits for file logs
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3


def _check_level(level: str) -> int:
    if level.upper() not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}. Must be one of {VALID_LOG_LEVELS}")
    return getattr(logging, level.upper())


def setup_logger(
    name: str,
    level: str = "INFO",
    log_file: Path | None = None
) -> logging.Logger:
    """
    Configure and return a logger instance.

    Attaches a console handler and, when ``log_file`` is given, a rotating
    file handler. Calling it again for the same name does not stack handlers,
    it only updates the level.

    Args:
        name: Logger name, normally ``"zdoc"``.
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path of a log file.

    Returns:
        Configured logger instance.

    Raises:
        ValueError: If level is not a valid log level.
    """
    numeric_level = _check_level(level)

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    has_console_handler = any(
        isinstance(h, logging.StreamHandler)
        and not isinstance(h, logging.handlers.RotatingFileHandler)
        for h in logger.handlers
    )
    has_file_handler = any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers
    )

    if not has_console_handler:
        add_console_handler(logger, level)
    else:
        for handler in logger.handlers:
            if not isinstance(handler, logging.handlers.RotatingFileHandler):
                handler.setLevel(numeric_level)

    if log_file is not None and not has_file_handler:
        add_file_handler(logger, log_file, level="DEBUG")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Retrieve a module logger.

    Handlers are never attached to the module logger itself. When nothing is
    configured yet, the top-level namespace logger (``zdoc``) receives the
    default console handler so a later :func:`setup_logger` call updates it
    instead of adding a second one.

    Args:
        name: Dotted logger name.

    Returns:
        Logger instance.
    """
    namespace = name.split(".", 1)[0]
    if not logging.getLogger(namespace).handlers:
        setup_logger(namespace)
    return logging.getLogger(name)


def add_file_handler(
    logger: logging.Logger,
    log_file: Path,
    level: str = "DEBUG"
) -> None:
    """
    Add a rotating file handler to ``logger``.

    The log directory is created when missing. File logs use the detailed
    format.

    Raises:
        ValueError: If level is not valid.
        OSError: If the log directory cannot be created.
    """
    numeric_level = _check_level(level)
    ensure_directory(log_file.parent)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8"
    )
    file_handler.setLevel(numeric_level)
    file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(file_handler)


def add_console_handler(logger: logging.Logger, level: str = "INFO") -> None:
    """
    Add a console handler using the simple format.

    Raises:
        ValueError: If level is not valid.
    """
    console_handler = logging.StreamHandler()
    console_handler.setLevel(_check_level(level))
    console_handler.setFormatter(logging.Formatter(SIMPLE_FORMAT))
    logger.addHandler(console_handler)
