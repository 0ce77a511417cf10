"""
Logging configuration and setup.

Console output always, file output when ``log_file`` is configured.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from app.settings import StoreSettings

ROOT_LOGGER = "scoped_store"


def setup_logging(settings: StoreSettings) -> logging.Logger:
    """
    Configure the package logger from settings.

    Args:
        settings: Settings carrying ``log_level`` and ``log_file``

    Returns:
        The configured package root logger
    """
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(getattr(logging, settings.log_level))

    # Remove existing handlers so repeated setup doesn't duplicate output
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, settings.log_level))
    console_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(getattr(logging, settings.log_level))
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    root_logger.propagate = False
    root_logger.debug("Logging initialized - Level: %s", settings.log_level)
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Logger under the package root, typically ``get_logger(__name__)``."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
