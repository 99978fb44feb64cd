"""Messenger implementations."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape

from reposync.contracts.notify import Messenger

_LOG = logging.getLogger(__name__)


class LoggingMessenger(Messenger):
    """Routes user-facing messages to the ``reposync`` loggers."""

    def add_status(self, message: str) -> None:
        _LOG.info(message)

    def add_warning(self, message: str) -> None:
        _LOG.warning(message)

    def add_error(self, message: str) -> None:
        _LOG.error(message)


class ConsoleMessenger(Messenger):
    """Prints messages to a Rich console (stderr by default)."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)

    def add_status(self, message: str) -> None:
        self._console.print(f"[green]•[/green] {escape(message)}")

    def add_warning(self, message: str) -> None:
        self._console.print(f"[yellow]![/yellow] {escape(message)}")

    def add_error(self, message: str) -> None:
        self._console.print(f"[red]✗[/red] {escape(message)}")
