################################################################################
# VACKUP
#
# @file:        logging.py
# @module:      vackup.helpers.logging
# @description: Logger factory and handler setup for CLI and TUI modes.
# @author:      Vackup Contributors
# @version:     1.0.0
#
# ------------------------------------------------------------------------------
# Copyright (c) 2026 Vackup Contributors
# MIT License: see LICENSE or https://opensource.org/licenses/MIT
################################################################################

"""
Logging setup for Vackup.

The CLI logs to stderr through Rich. The terminal UI must not write to the
terminal it is drawing on, so its records go to Textual's log instead.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from ..constants import LOG_DATE_FORMAT, LOG_FORMAT

ROOT_LOGGER_NAME = "vackup"


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the package's root logger."""
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[Path] = None,
    tui: bool = False,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Log level name or number
        log_file: Optional file receiving a rotating copy of all records
        tui: Route console records to Textual instead of stderr

    Returns:
        The configured root logger of the package
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if tui:
        from textual.logging import TextualHandler
        console_handler: logging.Handler = TextualHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
    else:
        console_handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger
