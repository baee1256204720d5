from __future__ import annotations

import os
from typing import Any, Dict, List, Sequence

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from .base import Reporter, TaskRecord, TaskStatus, get_verbosity

_SEVERITY_STYLE = {"error": "bold red", "warning": "yellow"}


class RichReporter(Reporter):
    """Progress bars, rules and tables on a stderr console.

    With ``PCKTOOLS_PROGRESS_TRANSIENT=1`` the bars vanish once done and the
    completion lines are printed together when the last task ends.
    """

    def __init__(self, console: Console | None = None) -> None:
        super().__init__()
        self.console = console or Console(stderr=True, highlight=False)
        self.transient = os.getenv(
            "PCKTOOLS_PROGRESS_TRANSIENT", ""
        ).lower() in {"1", "true", "yes"}
        self._progress: Progress | None = None
        self._bars: Dict[str, TaskID] = {}
        self._pending: List[str] = []

    def _bar_for(self, rec: TaskRecord) -> TaskID:
        if self._progress is None:
            self._progress = Progress(
                SpinnerColumn(),
                TextColumn("{task.description}"),
                BarColumn(bar_width=None),
                MofNCompleteColumn(),
                TimeElapsedColumn(),
                console=self.console,
                transient=self.transient,
            )
            self._progress.start()
        return self._progress.add_task(escape(rec.label), total=rec.total)

    def _on_start(self, rec: TaskRecord) -> None:
        if rec.total is None:
            self.console.rule(escape(rec.label))
        else:
            self._bars[rec.task_id] = self._bar_for(rec)

    def _on_advance(self, rec: TaskRecord) -> None:
        bar = self._bars.get(rec.task_id)
        if bar is None or self._progress is None:
            return
        label = f"{rec.label} {rec.current}".rstrip()
        self._progress.update(bar, completed=rec.completed, description=escape(label))

    def _on_end(self, rec: TaskRecord) -> None:
        bar = self._bars.pop(rec.task_id, None)
        if bar is not None and self._progress is not None:
            self._progress.update(bar, completed=rec.total)
        icon = "[green]✔[/]" if rec.status is TaskStatus.SUCCESS else "[red]✖[/]"
        line = f"{icon} {escape(rec.completion_text())}"
        if self.transient:
            self._pending.append(line)
        else:
            self.console.print(line)
        if not self._tasks:
            self.flush()

    def status(self, message: str) -> None:
        self.console.print(f"[green]INFO[/]: {escape(message)}")

    def verbose(self, message: str, *, level: int = 1) -> None:
        if get_verbosity() >= level:
            self.console.print(f"[cyan]VERB{level}[/]: {escape(message)}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]WARN[/]: {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]ERROR[/]: {escape(message)}")

    def section(self, title: str) -> None:
        self.console.rule(escape(title))

    def finding(
        self, code: str, message: str, path: str = "", severity: str = "error"
    ) -> None:
        style = _SEVERITY_STYLE.get(severity, "yellow")
        where = f" [dim]{escape(path)}[/]" if path else ""
        self.console.print(f"[{style}]{code}[/]{where}: {escape(message)}")

    def table(
        self, title: str, columns: Sequence[str], rows: Sequence[Sequence[Any]]
    ) -> None:
        grid = Table(title=title)
        for col in columns:
            grid.add_column(col)
        for row in rows:
            grid.add_row(*(str(v) for v in row))
        self.console.print(grid)

    def flush(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
            self._bars.clear()
        if self._pending:
            self.console.print("\n".join(self._pending))
            self._pending.clear()
