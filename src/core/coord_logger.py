"""Coordinate leak logging pipeline.

Host-agnostic: chat lines come in, timestamped records go out through the
log sink port, and the user is told about each logged leak.
"""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Callable, Optional

from core.chat_lines import extract_sender, is_own_message, strip_timestamp
from core.config import CoordinateConfig
from core.coordinates import CoordinateExtractor
from core.models import CoordinateMatch, LogStream
from core.ports import LogSinkPort, StatusPort
from core.records import format_coordinate_content, format_entry

LOGGER = logging.getLogger(__name__)

COORDS_FEATURE = "ChatCoordLeaks"


class CoordinateLogger:
    """Writes every coordinate leak seen in chat to a per-server file."""

    def __init__(
        self,
        config: CoordinateConfig,
        sink: LogSinkPort,
        status: StatusPort,
        server: str,
        player_name: Optional[str] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._config = config
        self._sink = sink
        self._status = status
        self._server = server
        self._player_name = player_name
        self._clock = clock
        self._extractor = CoordinateExtractor(config)

    @property
    def stream(self) -> LogStream:
        return LogStream(COORDS_FEATURE, None, f"ccl_{self._server}")

    def handle_line(self, line: str) -> Optional[CoordinateMatch]:
        """Log coordinates found in ``line``. Never raises."""

        try:
            if not line:
                return None
            text = strip_timestamp(line)
            if not self._config.log_own_coordinates and is_own_message(text, self._player_name):
                return None

            coords = self._extractor.extract(text)
            if coords is None:
                return None

            sender = extract_sender(text)
            content = format_coordinate_content(sender, coords, line)
            try:
                self._sink.append(self.stream, format_entry(content, self._clock()))
            except OSError:
                LOGGER.exception("Failed to write coordinate log")
                self._status.error("Failed to write coordinate log")
                return None

            self._status.info(
                f"Logged {coords.kind.value} coordinates from {sender} to {self.stream.file_name}"
            )
            return coords
        except Exception:
            LOGGER.exception("Error while checking chat line for coordinates")
            return None

    def activate(self) -> bool:
        try:
            self._sink.ensure_directory(COORDS_FEATURE)
        except OSError:
            LOGGER.exception("Failed to create coordinate log directory")
            self._status.error("Failed to create directory structure")
            return False
        self._status.info(
            f"Chat Coordinate Logger activated. Current log file: {self.stream.file_name}"
        )
        return True
