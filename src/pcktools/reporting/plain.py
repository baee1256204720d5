from __future__ import annotations

import sys
from typing import TextIO

from .base import Reporter, TaskRecord, TaskStatus, get_verbosity

_ICONS = {TaskStatus.SUCCESS: "✔", TaskStatus.FAILED: "✖"}


class PlainReporter(Reporter):
    """Deterministic line output for logs and CI; ANSI colour only on a TTY."""

    def __init__(
        self, stream: TextIO | None = None, use_color: bool | None = None
    ) -> None:
        super().__init__()
        self.stream = stream or sys.stderr
        if use_color is None:
            use_color = self.stream.isatty()
        self.use_color = use_color

    def _write(self, text: str) -> None:
        self.stream.write(text + "\n")

    def _tagged(self, tag: str, color: str, message: str) -> None:
        if self.use_color:
            tag = f"\x1b[{color}m{tag}\x1b[0m"
        self._write(f"{tag}: {message}")

    def _on_advance(self, rec: TaskRecord) -> None:
        if get_verbosity() < 1:
            return
        item = rec.current or f"item#{rec.completed}"
        total = "?" if rec.total is None else rec.total
        self._write(f"   · {rec.label}: {item} ({rec.completed}/{total})")

    def _on_end(self, rec: TaskRecord) -> None:
        self._write(f" {_ICONS.get(rec.status, '?')} {rec.completion_text()}")

    def status(self, message: str) -> None:
        self._tagged("INFO", "32", message)

    def verbose(self, message: str, *, level: int = 1) -> None:
        if get_verbosity() >= level:
            self._tagged(f"VERB{level}", "36", message)

    def warning(self, message: str) -> None:
        self._tagged("WARN", "33", message)

    def error(self, message: str) -> None:
        self._tagged("ERROR", "31", message)

    def section(self, title: str) -> None:
        self._write(f"\n[{title}]")
