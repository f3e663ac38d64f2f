"""Per-correspondent conversation sessions (core domain).

The tracker owns the only table of session records. Every read and write of
message counts, activity times, and open/closed state goes through it so the
state machine lives in one place:

- CLOSED -> OPEN on the first archived message (start marker first)
- OPEN -> OPEN on later messages (activity and count updated)
- OPEN -> CLOSED on ``end_all`` or an inactivity ``sweep``

Closing a closed session is a no-op.
"""

from __future__ import annotations

from datetime import datetime, timedelta
import logging
from typing import Callable, Dict, List, Optional

from core.config import ArchiveConfig
from core.models import ConversationMatch, LogStream, SessionRecord
from core.naming import sanitize_file_name
from core.ports import LogSinkPort, StatusPort
from core.records import (
    file_stamp,
    format_conversation_content,
    format_entry,
    format_session_marker,
    session_ended_info,
    session_started_info,
)

LOGGER = logging.getLogger(__name__)

ARCHIVE_FEATURE = "PrivateMessageArchiver"


class SessionTracker:
    """Tracks open conversations and writes their records."""

    def __init__(
        self,
        config: ArchiveConfig,
        sink: LogSinkPort,
        status: StatusPort,
        server: str,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._config = config
        self._sink = sink
        self._status = status
        self._server = server
        self._clock = clock
        self._sessions: Dict[str, SessionRecord] = {}

    def get(self, correspondent: str) -> Optional[SessionRecord]:
        return self._sessions.get(sanitize_file_name(correspondent))

    def open_sessions(self) -> List[str]:
        return [key for key, record in self._sessions.items() if record.is_open]

    def _stream(self, key: str, stamp: Optional[str]) -> LogStream:
        name = key if stamp is None else f"{key}_{stamp}"
        return LogStream(ARCHIVE_FEATURE, self._server, name)

    def current_stream(self, correspondent: str) -> LogStream:
        key = sanitize_file_name(correspondent)
        record = self._sessions.get(key)
        return self._stream(key, record.file_stamp if record else None)

    def _append(self, stream: LogStream, entry: str, correspondent: str) -> bool:
        try:
            self._sink.append(stream, entry)
        except OSError:
            LOGGER.exception("Failed to archive message for %s", stream.name)
            self._status.error(f"Failed to archive message for {correspondent}")
            return False
        return True

    def _settle(
        self,
        record: SessionRecord,
        correspondent: str,
        stream: LogStream,
        stamp: Optional[str],
        now: datetime,
    ) -> None:
        if record.rollover_pending:
            LOGGER.info("Rolled archive for %s over to %s", correspondent, stream.file_name)
        record.display_name = correspondent
        record.file_stamp = stamp
        record.rollover_pending = False
        record.last_activity = now
        record.is_open = True

    def record_message(self, match: ConversationMatch) -> Optional[LogStream]:
        """Archive one message, opening the session first when needed.

        Returns the stream written to, or None when the write failed. A failed
        message write leaves the count untouched; a start marker that made it
        to disk still opens the session so it is not written twice.
        """

        key = sanitize_file_name(match.correspondent)
        record = self._sessions.get(key)
        if record is None:
            record = SessionRecord(display_name=match.correspondent)
            self._sessions[key] = record

        now = self._clock()
        stamp = file_stamp(now) if record.rollover_pending else record.file_stamp
        stream = self._stream(key, stamp)

        if not record.is_open and self._config.log_session_markers:
            marker = format_session_marker(session_started_info(match.correspondent), now)
            if not self._append(stream, marker, match.correspondent):
                return None
            self._settle(record, match.correspondent, stream, stamp, now)

        content = format_conversation_content(match)
        entry = format_entry(content, now if self._config.include_timestamps else None)
        if not self._append(stream, entry, match.correspondent):
            return None

        self._settle(record, match.correspondent, stream, stamp, now)
        record.message_count += 1
        if record.message_count >= self._config.max_messages_per_file:
            record.message_count = 0
            record.rollover_pending = True
        return stream

    def close(self, correspondent: str, reason: str) -> bool:
        """Close one session. Returns False when it was not open."""

        key = sanitize_file_name(correspondent)
        record = self._sessions.get(key)
        if record is None or not record.is_open:
            return False

        record.is_open = False
        if self._config.log_session_markers:
            info = session_ended_info(record.display_name, reason)
            marker = format_session_marker(info, self._clock())
            try:
                self._sink.append(self._stream(key, record.file_stamp), marker)
            except OSError:
                LOGGER.exception("Failed to write end marker for %s", key)
                self._status.error(f"Failed to write session end marker for {record.display_name}")
        LOGGER.debug("Session with %s closed: %s", key, reason)
        return True

    def end_all(self, reason: str) -> List[str]:
        """Close every open session with the same reason."""

        closed = [key for key in self.open_sessions() if self.close(key, reason)]
        if closed:
            LOGGER.info("Ended %s session(s): %s", len(closed), reason)
        return closed

    def sweep(self) -> List[str]:
        """Close sessions idle for longer than the configured timeout."""

        minutes = self._config.session_timeout_minutes
        timeout = timedelta(minutes=minutes)
        now = self._clock()
        closed: List[str] = []
        for key in self.open_sessions():
            last_activity = self._sessions[key].last_activity
            if last_activity is not None and now - last_activity > timeout:
                if self.close(key, f"TIMEOUT ({minutes} minutes)"):
                    closed.append(key)
        return closed
