from __future__ import annotations

from .base import Reporter


class SilentReporter(Reporter):
    """Keeps task book-keeping, renders nothing."""

    def status(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass

    def section(self, title: str) -> None:
        pass
