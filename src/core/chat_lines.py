"""Chat line helpers shared by both classifiers."""

from __future__ import annotations

import re
from typing import Optional

UNKNOWN_SENDER = "Unknown"

# Client-side chat timestamps look like "<12:34> ".
_TIMESTAMP_PREFIX = re.compile(r"^<\d{1,2}:\d{2}>\s*")

# <PlayerName> message, [PlayerName] message, PlayerName: message
_SENDER_PATTERN = re.compile(r"^(?:<([^>]+)>|\[([^\]]+)\]|([^:]+):)")

CONVERSATION_KEYWORDS = ("whisper", "tell", "message", " -> ", "from ", "to ", "reply")


def strip_timestamp(line: str) -> str:
    """Remove a leading chat timestamp prefix, if any."""

    match = _TIMESTAMP_PREFIX.match(line)
    return line[match.end():] if match else line


def extract_sender(line: str) -> str:
    """Return the sender name of a public chat line, or ``Unknown``."""

    match = _SENDER_PATTERN.match(line)
    if match:
        for group in match.groups():
            if group is not None:
                return group.strip()
    return UNKNOWN_SENDER


def is_own_message(line: str, player_name: Optional[str]) -> bool:
    if player_name is None:
        return False
    return extract_sender(line) == player_name


def has_conversation_keywords(line: str) -> bool:
    """True when a line looks like a private message we failed to parse."""

    lowered = line.lower()
    return any(keyword in lowered for keyword in CONVERSATION_KEYWORDS)
