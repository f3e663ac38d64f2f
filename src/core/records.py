"""Shared record formatting helpers.

Keeping formatting here prevents drift between the coordinate logger and the
message archiver and keeps archived files consistent.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from core.models import ConversationMatch, CoordinateMatch

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
FILE_STAMP_FORMAT = "%Y%m%d_%H%M%S"
RULE = "=" * 52


def format_entry(content: str, timestamp: Optional[datetime] = None) -> str:
    """Return one newline-terminated record, timestamped when given a time."""

    if timestamp is None:
        return f"{content}\n"
    return f"[{timestamp.strftime(TIME_FORMAT)}] {content}\n"


def format_session_marker(info: str, timestamp: datetime) -> str:
    """Return the three-line session separator block."""

    return "\n".join(
        [
            RULE,
            f"[{timestamp.strftime(TIME_FORMAT)}] SESSION: {info}",
            RULE,
            "",
        ]
    )


def format_coordinate_content(sender: str, coords: CoordinateMatch, line: str) -> str:
    y = "?" if coords.y is None else str(coords.y)
    return (
        f"Player: {sender} | Coords ({coords.kind.value}): "
        f"{coords.x}, {y}, {coords.z} | Message: {line}"
    )


def format_conversation_content(match: ConversationMatch) -> str:
    return f"{match.direction.label} {match.correspondent}: {match.content}"


def session_started_info(display_name: str) -> str:
    return f"CONVERSATION STARTED WITH {display_name.upper()}"


def session_ended_info(display_name: str, reason: str) -> str:
    return f"CONVERSATION ENDED WITH {display_name.upper()} - {reason}"


def file_stamp(timestamp: datetime) -> str:
    return timestamp.strftime(FILE_STAMP_FORMAT)
