# src/parakontra/logging.py
"""
Logging helpers.

All loggers live under the ``parakontra`` namespace so applications can tune
them with a single ``logging.getLogger("parakontra")`` call.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

_ROOT = "parakontra"
_configured = False


class _StderrHandler(logging.StreamHandler):
    """Writes to whatever sys.stderr is at emit time."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value):
        pass


def configure_logging(level: Optional[Union[str, int]] = None) -> None:
    """
    Attach a stderr handler to the package logger and set its level.

    Level defaults to `ParakontraConfig.log_level`. Safe to call repeatedly.
    """
    global _configured

    if level is None:
        from parakontra.config.settings import load_config

        level = load_config().log_level

    root = logging.getLogger(_ROOT)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    root.setLevel(level)

    if not _configured:
        handler = _StderrHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)
        _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under ``parakontra``."""
    if name == _ROOT or name.startswith(_ROOT + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT}.{name}")


def log_exception(logger: logging.Logger, message: str, exc: BaseException) -> None:
    """Log a one-line warning, with the full traceback at DEBUG."""
    logger.warning("%s: %s: %s", message, type(exc).__name__, exc)
    logger.debug("%s (traceback)", message, exc_info=exc)
