"""Toast-style notifications."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.text import Text

VARIANT_STYLES = {
    "success": "green",
    "error": "bold red",
    "warning": "yellow",
    "info": "cyan",
}


class Notifier(Protocol):
    def success(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def info(self, message: str) -> None: ...


class _BaseNotifier:
    def show(self, message: str, variant: str = "info") -> None:
        raise NotImplementedError

    def success(self, message: str) -> None:
        self.show(message, "success")

    def error(self, message: str) -> None:
        self.show(message, "error")

    def warning(self, message: str) -> None:
        self.show(message, "warning")

    def info(self, message: str) -> None:
        self.show(message, "info")


class ConsoleNotifier(_BaseNotifier):
    def __init__(self, console: Console) -> None:
        self.console = console

    def show(self, message: str, variant: str = "info") -> None:
        style = VARIANT_STYLES.get(variant, "")
        self.console.print(Text(f"● {message}", style=style))


class RecordingNotifier(_BaseNotifier):
    """Keeps every notification as a (variant, message) pair."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def show(self, message: str, variant: str = "info") -> None:
        self.messages.append((variant, message))

    def of(self, variant: str) -> list[str]:
        return [m for v, m in self.messages if v == variant]
