"""Console status adapter.

Prints the user-visible status channel (logged leaks, write failures) with
rich so it stays readable next to the application log.
"""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.text import Text


class ConsoleStatus:
    """StatusPort implementation that prints prefixed lines to a console."""

    def __init__(self, name: str, console: Optional[Console] = None) -> None:
        self._name = name
        self._console = console or Console(highlight=False)

    def _print(self, message: str, style: str) -> None:
        line = Text.assemble((f"[{self._name}] ", "bold"), (message, style))
        self._console.print(line)

    def info(self, message: str) -> None:
        self._print(message, "cyan")

    def error(self, message: str) -> None:
        self._print(message, "bold red")
