"""
Logging configuration for the Campus Event Hub.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger and sets the level of the
``campus_event_hub`` package logger from the settings.  ``DEBUG=true``
forces debug output for the package without making third-party
libraries chatty.  Calling it again only re-applies levels; handlers
are attached once.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import Settings, settings

PACKAGE_LOGGER = "campus_event_hub"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_CONSOLE_HANDLER = f"{PACKAGE_LOGGER}.console"
_FILE_HANDLER = f"{PACKAGE_LOGGER}.file"


def _has_handler(logger: logging.Logger, name: str) -> bool:
    return any(handler.get_name() == name for handler in logger.handlers)


def setup_logging(config: Optional[Settings] = None) -> logging.Logger:
    """Configure logging from ``config`` (the global settings by default).

    Returns the package logger.
    """
    config = config or settings
    level = getattr(logging, config.log_level.upper(), logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG if config.debug else level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if not _has_handler(root, _CONSOLE_HANDLER):
        console_handler = logging.StreamHandler()
        console_handler.set_name(_CONSOLE_HANDLER)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if config.log_file and not _has_handler(root, _FILE_HANDLER):
        file_handler = logging.FileHandler(Path(config.log_file).resolve(), encoding="utf-8")
        file_handler.set_name(_FILE_HANDLER)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return package_logger
