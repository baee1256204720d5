"""JSON-lines reporter: one event object per line, meant for scripts and CI.

Event types: ``task_start``, ``task_progress``, ``task_end``, ``message``,
``section``, ``table``, ``finding`` (a validation record) and ``summary``
(closing counts of a command, ``summary_type`` names the command).
"""

from __future__ import annotations

import json
import sys
from typing import Any, Sequence, TextIO

from .base import Reporter, TaskRecord, get_verbosity


class JsonLinesReporter(Reporter):
    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self.stream = stream or sys.stdout

    def _emit(self, event: str, **payload: Any) -> None:
        payload["event"] = event
        self.stream.write(json.dumps(payload, sort_keys=True) + "\n")

    def _on_start(self, rec: TaskRecord) -> None:
        self._emit("task_start", id=rec.task_id, label=rec.label, total=rec.total)

    def _on_advance(self, rec: TaskRecord) -> None:
        self._emit(
            "task_progress",
            id=rec.task_id,
            completed=rec.completed,
            current=rec.current,
        )

    def _on_end(self, rec: TaskRecord) -> None:
        self._emit(
            "task_end",
            id=rec.task_id,
            label=rec.label,
            status=rec.status.value,
            completed=rec.completed,
            total=rec.total,
            duration_seconds=round(rec.duration, 6),
            **rec.stats,
        )

    def status(self, message: str) -> None:
        self._emit("message", level="info", text=message)

    def verbose(self, message: str, *, level: int = 1) -> None:
        if get_verbosity() >= level:
            self._emit("message", level=f"verbose{level}", text=message)

    def warning(self, message: str) -> None:
        self._emit("message", level="warning", text=message)

    def error(self, message: str) -> None:
        self._emit("message", level="error", text=message)

    def section(self, title: str) -> None:
        self._emit("section", title=title)

    def finding(
        self, code: str, message: str, path: str = "", severity: str = "error"
    ) -> None:
        self._emit(
            "finding", code=code, message=message, path=path, severity=severity
        )

    def summary(self, kind: str, **fields: Any) -> None:
        self._emit("summary", summary_type=kind, **fields)

    def table(
        self, title: str, columns: Sequence[str], rows: Sequence[Sequence[Any]]
    ) -> None:
        self._emit(
            "table",
            title=title,
            columns=list(columns),
            rows=[list(r) for r in rows],
        )
