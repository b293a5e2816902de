"""Logging setup for clipmark."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "clipmark"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configured(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Configure the ``clipmark`` logger.

    Every module logs on a child of this logger, so URL-resolution and math
    warnings from a conversion end up on the handlers installed here.
    Calling it again only changes the level unless ``force`` is set.

    Args:
        level: Logging level name; unknown names fall back to INFO
        log_file: Optional file that receives the same records
        format_string: Optional custom format string for log messages
        force: Replace handlers installed by an earlier call

    Returns:
        The configured ``clipmark`` logger
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    if logger.handlers and not force:
        return logger

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    # stderr keeps stdout free for Markdown written by the CLI
    logger.addHandler(_configured(logging.StreamHandler(sys.stderr), numeric_level, formatter))
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        logger.addHandler(_configured(file_handler, numeric_level, formatter))

    logger.propagate = False
    return logger
