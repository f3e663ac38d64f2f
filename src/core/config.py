"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CoordinateConfig:
    """Settings for the coordinate leak logger."""

    ignore_spawn_radius: bool = True
    spawn_radius: int = 1500
    log_own_coordinates: bool = False
    detect_xz_coordinates: bool = True
    min_coord_value: int = 100


@dataclass(frozen=True)
class ArchiveConfig:
    """Settings for the private message archiver and its sessions."""

    log_own_messages: bool = True
    include_timestamps: bool = True
    max_messages_per_file: int = 1000
    end_on_disconnect: bool = True
    session_timeout_minutes: int = 30
    log_session_markers: bool = True
    debug_to_file: bool = False
