"""Reporter backends, selectable with ``pcktools -r``.

``plain`` writes tagged lines to stderr, ``json`` writes JSON-lines events to
stdout, ``rich`` draws progress bars and tables, ``silent`` renders nothing.
"""

from .base import (
    Reporter,
    TaskRecord,
    TaskStatus,
    get_reporter,
    get_verbosity,
    set_reporter,
    set_verbosity,
    task,
)
from .jsonl import JsonLinesReporter
from .plain import PlainReporter
from .rich_reporter import RichReporter
from .silent import SilentReporter

BACKENDS = {
    "plain": PlainReporter,
    "rich": RichReporter,
    "json": JsonLinesReporter,
    "silent": SilentReporter,
}

__all__ = [
    "BACKENDS",
    "Reporter",
    "TaskRecord",
    "TaskStatus",
    "get_reporter",
    "get_verbosity",
    "set_reporter",
    "set_verbosity",
    "task",
    "JsonLinesReporter",
    "PlainReporter",
    "RichReporter",
    "SilentReporter",
]
