"""Ports (interfaces) used by the core services.

Ports define the minimal contracts for log sinks and status reporting so
that the core can be reused with different hosts.
"""

from __future__ import annotations

from typing import Protocol

from core.models import LogStream


class LogSinkPort(Protocol):
    """Append-only log operations required by the core services.

    Implementations raise OSError when a directory or file cannot be written.
    """

    def append(self, stream: LogStream, entry: str) -> None:
        ...

    def ensure_directory(self, feature: str, server: str | None = None) -> None:
        ...


class StatusPort(Protocol):
    """User-visible status channel."""

    def info(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...
