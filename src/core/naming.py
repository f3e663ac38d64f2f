"""Helpers for building file-system safe names for log streams."""

from __future__ import annotations

import re
from typing import Optional

UNKNOWN_SERVER = "unknown_server"
SINGLEPLAYER_UNKNOWN = "singleplayer_unknown"

_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*]')


def sanitize_file_name(name: str) -> str:
    """Replace characters that are invalid in file names and lowercase."""

    return _UNSAFE_CHARS.sub("_", name).lower()


def server_key(
    address: Optional[str] = None,
    world_name: Optional[str] = None,
    player_name: Optional[str] = None,
) -> str:
    """Return the per-server folder key.

    Multiplayer servers are keyed by address without the port. Singleplayer
    worlds fall back to the world name, then to ``<player>_world``.
    """

    if address and address.strip():
        host = address.strip().split(":", 1)[0]
        if host:
            return sanitize_file_name(host)
        return UNKNOWN_SERVER

    if world_name is not None:
        if world_name.strip():
            return sanitize_file_name(world_name.strip())
        if player_name:
            return sanitize_file_name(f"{player_name}_world")
        return SINGLEPLAYER_UNKNOWN

    return UNKNOWN_SERVER
