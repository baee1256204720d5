"""Reporter interface and the process-wide reporter/verbosity settings.

Library code never prints: it reports through whichever reporter the CLI (or a
test) installed with :func:`set_reporter`. Task book-keeping (counters, timing,
per-task stats) lives on :class:`Reporter`; backends only render it through the
``_on_start`` / ``_on_advance`` / ``_on_end`` hooks.
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Sequence

__all__ = [
    "STAT_KEYS",
    "TaskStatus",
    "TaskRecord",
    "Reporter",
    "set_reporter",
    "get_reporter",
    "set_verbosity",
    "get_verbosity",
    "task",
]

# per-task stats shown on completion, in display order
STAT_KEYS = ("entries", "bytes", "errors", "warnings")


class TaskStatus(Enum):
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(slots=True)
class TaskRecord:
    task_id: str
    label: str
    total: Optional[int] = None
    completed: int = 0
    current: str = ""
    status: TaskStatus = TaskStatus.RUNNING
    started: float = field(default_factory=time.monotonic)
    finished: Optional[float] = None
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def duration(self) -> float:
        end = self.finished if self.finished is not None else time.monotonic()
        return end - self.started

    def completion_text(self) -> str:
        """``Label 3/3 (0.01s) [entries=3 bytes=42]``"""
        text = self.label
        if self.total is not None:
            text += f" {self.completed}/{self.total}"
        text += f" ({self.duration:.2f}s)"
        stats = [f"{k}={self.stats[k]}" for k in STAT_KEYS if k in self.stats]
        if stats:
            text += f" [{' '.join(stats)}]"
        return text


class Reporter:
    def __init__(self) -> None:
        self._tasks: Dict[str, TaskRecord] = {}

    # Tasks -------------------------------------------------------------------
    def start_task(
        self, task_id: str, label: str, total: int | None = None
    ) -> TaskRecord:
        rec = TaskRecord(task_id, label, total)
        self._tasks[task_id] = rec
        self._on_start(rec)
        return rec

    def advance(self, task_id: str, step: int = 1, current: str = "") -> None:
        rec = self._tasks.get(task_id)
        if rec is None:
            return
        rec.completed += step
        rec.current = current
        self._on_advance(rec)

    def end_task(
        self,
        task_id: str,
        status: TaskStatus = TaskStatus.SUCCESS,
        **stats: int,
    ) -> None:
        rec = self._tasks.pop(task_id, None)
        if rec is None:
            return
        rec.status = status
        rec.finished = time.monotonic()
        rec.stats.update(stats)
        self._on_end(rec)

    def _on_start(self, rec: TaskRecord) -> None:
        pass

    def _on_advance(self, rec: TaskRecord) -> None:
        pass

    def _on_end(self, rec: TaskRecord) -> None:
        pass

    # Messages ----------------------------------------------------------------
    def status(self, message: str) -> None:
        raise NotImplementedError

    def verbose(self, message: str, *, level: int = 1) -> None:
        pass

    def warning(self, message: str) -> None:
        self.status(message)

    def error(self, message: str) -> None:
        raise NotImplementedError

    def section(self, title: str) -> None:
        raise NotImplementedError

    def finding(
        self, code: str, message: str, path: str = "", severity: str = "error"
    ) -> None:
        """One validation record."""
        line = f"{code} {path}: {message}" if path else f"{code}: {message}"
        if severity == "error":
            self.error(line)
        else:
            self.warning(line)

    def summary(self, kind: str, **fields: Any) -> None:
        """Closing counts of a command, e.g. ``summary("diff", count=2)``."""
        pairs = " ".join(f"{k}={v}" for k, v in fields.items())
        self.status(f"{kind.capitalize()} summary: {pairs}")

    def table(
        self, title: str, columns: Sequence[str], rows: Sequence[Sequence[Any]]
    ) -> None:
        self.section(title)
        for row in rows:
            self.status(" ".join(f"{c}={v}" for c, v in zip(columns, row)))

    def flush(self) -> None:
        pass


_VERBOSITY = 0
_ACTIVE: Reporter | None = None


def set_verbosity(level: int) -> None:
    global _VERBOSITY
    _VERBOSITY = max(0, level)


def get_verbosity() -> int:
    return _VERBOSITY


def set_reporter(rep: Reporter) -> None:
    global _ACTIVE
    _ACTIVE = rep


def get_reporter() -> Reporter:
    global _ACTIVE
    if _ACTIVE is None:
        from .plain import PlainReporter

        _ACTIVE = PlainReporter(stream=sys.stderr)
    return _ACTIVE


@contextmanager
def task(
    task_id: str, label: str, total: int | None = None
) -> Iterator[TaskRecord]:
    """Run a block as a reported task; stats set on the record are shown at the end."""
    rep = get_reporter()
    rec = rep.start_task(task_id, label, total)
    try:
        yield rec
    except Exception:
        rep.end_task(task_id, TaskStatus.FAILED)
        raise
    rep.end_task(task_id, TaskStatus.SUCCESS)
