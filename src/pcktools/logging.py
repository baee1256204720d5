"""Logging for pcktools.

Modules log through the ``pcktools`` logger tree (``pcktools.container``,
``pcktools.loader``, ...). :func:`configure_logging` routes those records to
the active reporter: errors and warnings keep their level, INFO becomes a
status line and DEBUG a level-2 verbose line tagged with the sub-logger name.
"""

from __future__ import annotations

import logging

from .reporting import get_reporter

__all__ = ["get_logger", "configure_logging", "step"]

ROOT = "pcktools"


def get_logger(child: str | None = None) -> logging.Logger:
    return logging.getLogger(f"{ROOT}.{child}" if child else ROOT)


class _ToReporter(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        rep = get_reporter()
        text = self.format(record)
        if record.levelno >= logging.ERROR:
            rep.error(text)
        elif record.levelno >= logging.WARNING:
            rep.warning(text)
        elif record.levelno >= logging.INFO:
            rep.status(text)
        else:
            origin = record.name[len(ROOT) + 1 :] or ROOT
            rep.verbose(f"[{origin}] {text}", level=2)


def configure_logging(verbosity: int = 0) -> None:
    """Install the reporter bridge; ``-v`` lets DEBUG records through."""
    root = get_logger()
    root.setLevel(logging.DEBUG if verbosity >= 1 else logging.INFO)
    root.handlers[:] = [_ToReporter()]
    root.handlers[0].setFormatter(logging.Formatter("%(message)s"))
    root.propagate = False


def step(message: str) -> None:
    """Announce one stage of a command."""
    get_reporter().status(f"  -> {message}")
