"""Coordinate leak detection (core domain)."""

from __future__ import annotations

from dataclasses import dataclass
import math
import re
from typing import Optional, Tuple

from core.config import CoordinateConfig
from core.models import CoordinateKind, CoordinateMatch

# Values outside a 32-bit int are not world coordinates.
_MAX_AXIS = 2**31 - 1

# Each alternative starts with ".*" so the layouts are tried in order over the
# whole line: labelled, then parenthesised, then bare numbers.
XYZ_PATTERN = re.compile(
    r"(?:"
    # x: 123, y: 64, z: -456
    r"(?:.*(?:x|pos)\s*[:=]?\s*(-?\d+).*(?:y|height)\s*[:=]?\s*(-?\d+).*(?:z)\s*[:=]?\s*(-?\d+).*)|"
    # (123, 64, -456)
    r"(?:.*\(\s*(-?\d+)\s*,\s*(-?\d+)\s*,\s*(-?\d+)\s*\).*)|"
    # 123 64 -456
    r"(?:.*(?<![\w-])(-?\d+)\s+(-?\d+)\s+(-?\d+)\b.*)"
    r")",
    re.IGNORECASE | re.ASCII,
)

XZ_PATTERN = re.compile(
    r"(?:"
    # x: 123, z: -456
    r"(?:.*(?:x|pos)\s*[:=]?\s*(-?\d+).*(?:z)\s*[:=]?\s*(-?\d+).*)|"
    # (123, -456)
    r"(?:.*\(\s*(-?\d+)\s*,\s*(-?\d+)\s*\).*)|"
    # 1234 -5678, at least three digits each to skip small unrelated numbers
    r"(?:.*(?<![\w-])(-?\d{3,})\s+(-?\d{3,})\b.*)"
    r")",
    re.IGNORECASE | re.ASCII,
)


@dataclass(frozen=True)
class Detection:
    """Outcome of one pattern family.

    ``matched`` stays True when coordinates were found but filtered out, so
    a weaker family is not tried afterwards.
    """

    matched: bool
    coordinates: Optional[CoordinateMatch] = None


NO_MATCH = Detection(matched=False)


def _parse_axis(text: str) -> int:
    value = int(text)
    if abs(value) > _MAX_AXIS:
        raise ValueError(f"Coordinate out of range: {text}")
    return value


def _first_group_set(match: re.Match, size: int) -> Optional[Tuple[str, ...]]:
    groups = match.groups()
    for start in range(0, len(groups), size):
        chunk = groups[start:start + size]
        if chunk[0] is not None:
            return chunk
    return None


class CoordinateExtractor:
    """Find XYZ or XZ coordinates in a chat line."""

    def __init__(self, config: CoordinateConfig) -> None:
        self._config = config

    def is_within_spawn_radius(self, x: int, z: int) -> bool:
        return math.hypot(x, z) <= self._config.spawn_radius

    def _suppressed(self, x: int, z: int) -> bool:
        return self._config.ignore_spawn_radius and self.is_within_spawn_radius(x, z)

    def detect_xyz(self, line: str) -> Detection:
        match = XYZ_PATTERN.search(line)
        if not match:
            return NO_MATCH
        chunk = _first_group_set(match, 3)
        if chunk is None:
            return NO_MATCH
        try:
            x, y, z = (_parse_axis(value) for value in chunk)
        except ValueError:
            return NO_MATCH

        if self._suppressed(x, z):
            return Detection(matched=True)
        return Detection(True, CoordinateMatch(x=x, y=y, z=z, kind=CoordinateKind.XYZ))

    def detect_xz(self, line: str) -> Detection:
        match = XZ_PATTERN.search(line)
        if not match:
            return NO_MATCH
        chunk = _first_group_set(match, 2)
        if chunk is None:
            return NO_MATCH
        try:
            x, z = (_parse_axis(value) for value in chunk)
        except ValueError:
            return NO_MATCH

        minimum = self._config.min_coord_value
        if abs(x) < minimum and abs(z) < minimum:
            return NO_MATCH
        if self._suppressed(x, z):
            return Detection(matched=True)
        return Detection(True, CoordinateMatch(x=x, y=None, z=z, kind=CoordinateKind.XZ))

    def detect(self, line: str) -> Detection:
        """Run the XYZ family, then XZ only when XYZ found nothing."""

        result = self.detect_xyz(line)
        if result.matched:
            return result
        if self._config.detect_xz_coordinates:
            return self.detect_xz(line)
        return NO_MATCH

    def extract(self, line: str) -> Optional[CoordinateMatch]:
        return self.detect(line).coordinates
