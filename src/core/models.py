"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any host-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class CoordinateKind(str, Enum):
    XYZ = "XYZ"
    XZ = "XZ"


class Direction(str, Enum):
    INCOMING = "incoming"
    OUTGOING = "outgoing"

    @property
    def label(self) -> str:
        """Record label used in archived lines."""

        return "FROM" if self is Direction.INCOMING else "TO"


@dataclass(frozen=True)
class CoordinateMatch:
    """Coordinates recovered from a single chat line.

    ``y`` is None when only the horizontal pair was present.
    """

    x: int
    y: Optional[int]
    z: int
    kind: CoordinateKind


@dataclass(frozen=True)
class ConversationMatch:
    """A private message recovered from a single chat line."""

    correspondent: str
    content: str
    direction: Direction

    @property
    def is_incoming(self) -> bool:
        return self.direction is Direction.INCOMING


@dataclass(frozen=True)
class LogStream:
    """Address of an append-only log file, relative to the sink's base dir."""

    feature: str
    server: Optional[str]
    name: str

    @property
    def file_name(self) -> str:
        return f"{self.name}.txt"


@dataclass
class SessionRecord:
    """Mutable per-correspondent state owned by the session tracker."""

    display_name: str
    message_count: int = 0
    last_activity: Optional[datetime] = None
    is_open: bool = False
    # Timestamp suffix of the current archive file after a rollover.
    file_stamp: Optional[str] = None
    rollover_pending: bool = False
