"""Static configuration for chatscribe.

All user-editable settings (coordinate filters, archive sessions, paths,
logging) live in a single JSON file for quick edits without touching Python.
"""

import json
import os

from dotenv import load_dotenv

from core.config import ArchiveConfig, CoordinateConfig

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# The only .env load; app reads CHATSCRIBE_PLAYER and CHATSCRIBE_SERVER after
# importing this module.
load_dotenv()

# CHATSCRIBE_CONFIG points at an alternative config file; the default one is
# optional and every option has a default.
_CONFIG_OVERRIDE = os.getenv("CHATSCRIBE_CONFIG")
CONFIG_PATH = _CONFIG_OVERRIDE or os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        if _CONFIG_OVERRIDE:
            raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")
        return {}

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _bounded_int(section: dict, key: str, default: int, minimum: int, maximum: int) -> int:
    value = int(section.get(key, default))
    if not minimum <= value <= maximum:
        raise ValueError(f"{key} must be between {minimum} and {maximum}, got {value}")
    return value


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Root folder for every log stream; relative paths hang off the project root.
_paths = _CONFIG.get("paths", {})
BASE_DIR = _paths.get("base_dir", "chatscribe_logs")
if not os.path.isabs(BASE_DIR):
    BASE_DIR = os.path.join(PROJECT_ROOT, BASE_DIR)

# Coordinate leak filters.
# - SPAWN_RADIUS: leaks this close to 0,0 are not worth logging
# - MIN_COORD_VALUE: XZ pairs with both axes below this are ignored
_coordinates = _CONFIG.get("coordinates", {})
COORDINATES = CoordinateConfig(
    ignore_spawn_radius=bool(_coordinates.get("ignore_spawn_radius", True)),
    spawn_radius=_bounded_int(_coordinates, "spawn_radius", 1500, 0, 50000),
    log_own_coordinates=bool(_coordinates.get("log_own_coordinates", False)),
    detect_xz_coordinates=bool(_coordinates.get("detect_xz_coordinates", True)),
    min_coord_value=_bounded_int(_coordinates, "min_coord_value", 100, 1, 10000),
)

# Private message archive and session handling.
_archive = _CONFIG.get("archive", {})
ARCHIVE = ArchiveConfig(
    log_own_messages=bool(_archive.get("log_own_messages", True)),
    include_timestamps=bool(_archive.get("include_timestamps", True)),
    max_messages_per_file=_bounded_int(_archive, "max_messages_per_file", 1000, 100, 10000),
    end_on_disconnect=bool(_archive.get("end_on_disconnect", True)),
    session_timeout_minutes=_bounded_int(_archive, "session_timeout_minutes", 30, 5, 480),
    log_session_markers=bool(_archive.get("log_session_markers", True)),
    debug_to_file=bool(_archive.get("debug_to_file", False)),
)

# Feature switches let one of the two loggers run on its own.
_features = _CONFIG.get("features", {})
COORDS_ENABLED = bool(_features.get("coordinates", True))
ARCHIVE_ENABLED = bool(_features.get("archive", True))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
