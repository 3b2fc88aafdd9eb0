"""Logging for atomwriter.

Every module logs through ``get_logger(__name__)``. The package logger only
carries a ``NullHandler`` until an application calls ``setup_logging``.
"""

import logging
import sys
from pathlib import Path
from typing import TextIO

PACKAGE_LOGGER = "atomwriter"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_installed: list[logging.Handler] = []


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ``atomwriter`` hierarchy."""
    if name != PACKAGE_LOGGER and not name.startswith(f"{PACKAGE_LOGGER}."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(
    log_level: str = "INFO",
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Send atomwriter records to ``stream`` (stdout by default) and optionally a file.

    Handlers installed by an earlier call are replaced, so calling this twice
    does not duplicate output.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level.upper())

    while _installed:
        handler = _installed.pop()
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        _installed.append(handler)
    return logger


logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())
