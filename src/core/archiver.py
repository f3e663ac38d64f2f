"""Private message archiving pipeline.

This module is host-agnostic. It only relies on ports for log writes and
status reporting. Each chat line goes through a strict order:
1) Strip the client-side chat timestamp
2) Extract (correspondent, content, direction), or report near-misses
3) Drop outgoing messages when own messages are not archived
4) Hand the match to the session tracker, which writes the records
"""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Callable, Optional

from core.chat_lines import has_conversation_keywords, strip_timestamp
from core.config import ArchiveConfig
from core.conversations import ConversationExtractor
from core.diagnostics import BATCH_SIZE, DiagnosticQueue
from core.models import ConversationMatch, LogStream
from core.ports import LogSinkPort, StatusPort
from core.sessions import ARCHIVE_FEATURE, SessionTracker

LOGGER = logging.getLogger(__name__)

# Host ticks run at 20 per second; sweeps happen once per second.
TICKS_PER_SWEEP = 20

REASON_DISCONNECTED = "DISCONNECTED"
REASON_DEACTIVATED = "DEACTIVATED"


class MessageArchiver:
    """Archives private conversations into one file per correspondent."""

    def __init__(
        self,
        config: ArchiveConfig,
        sink: LogSinkPort,
        status: StatusPort,
        server: str,
        extractor: Optional[ConversationExtractor] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._config = config
        self._sink = sink
        self._status = status
        self._server = server
        self._extractor = extractor or ConversationExtractor()
        self._tracker = SessionTracker(config, sink, status, server, clock=clock)
        self._diagnostics = DiagnosticQueue(clock=clock)
        self._tick_counter = 0

    @property
    def tracker(self) -> SessionTracker:
        return self._tracker

    @property
    def diagnostics(self) -> DiagnosticQueue:
        return self._diagnostics

    @property
    def debug_stream(self) -> LogStream:
        return LogStream(ARCHIVE_FEATURE, self._server, f"pma_debug_{self._server}")

    def _debug(self, message: str) -> None:
        if self._config.debug_to_file:
            self._diagnostics.push(message)

    def handle_line(self, line: str) -> Optional[ConversationMatch]:
        """Archive one raw chat line. Never raises."""

        try:
            if not line or not line.strip():
                return None

            clean = strip_timestamp(line)
            match = self._extractor.extract(clean)
            if match is None:
                if has_conversation_keywords(clean):
                    self._debug(f"UNMATCHED: {line}")
                return None

            if not match.is_incoming and not self._config.log_own_messages:
                return None

            stream = self._tracker.record_message(match)
            direction = "IN" if match.is_incoming else "OUT"
            if stream is None:
                self._debug(f"FAILED: {direction} | {match.correspondent} | {line}")
                return None
            self._debug(f"MATCHED: {direction} | {match.correspondent} | {line}")
            return match
        except Exception as exc:
            LOGGER.exception("Error while archiving message")
            self._debug(f"ERROR: {exc}")
            return None

    def on_tick(self) -> None:
        self._tick_counter += 1
        if self._tick_counter >= TICKS_PER_SWEEP:
            self._tick_counter = 0
            self.sweep()

    def sweep(self) -> None:
        """Close idle sessions and write one batch of diagnostics."""

        self._tracker.sweep()
        self.flush_diagnostics(BATCH_SIZE)

    def flush_diagnostics(self, limit: Optional[int] = None) -> int:
        """Write queued diagnostics; all of them when ``limit`` is None."""

        if not self._config.debug_to_file:
            return 0
        if limit is None:
            batch = self._diagnostics.drain_all()
        else:
            batch = self._diagnostics.drain(limit)
        if not batch:
            return 0
        try:
            self._sink.append(self.debug_stream, "".join(f"{entry}\n" for entry in batch))
        except OSError:
            LOGGER.exception("Failed to write debug batch")
            self._status.error("Failed to write archiver debug log")
            return 0
        return len(batch)

    def on_disconnect(self) -> None:
        if self._config.end_on_disconnect:
            self._tracker.end_all(REASON_DISCONNECTED)

    def activate(self) -> bool:
        try:
            self._sink.ensure_directory(ARCHIVE_FEATURE, self._server)
        except OSError:
            LOGGER.exception("Failed to create archive directory")
            self._status.error("Failed to create directory structure")
            return False
        LOGGER.info("Private message archiver active for %s", self._server)
        return True

    def deactivate(self) -> None:
        self._tracker.end_all(REASON_DEACTIVATED)
        self.flush_diagnostics()
