"""Buffered debug diagnostics for the message archiver.

Chat events and ticks may arrive on different host threads, so this queue is
the one structure guarded by a lock. Entries are drained in small batches on
the tick path to keep file writes off the chat path.
"""

from __future__ import annotations

from collections import deque
from datetime import datetime
import threading
from typing import Callable, List

MAX_ENTRIES = 1000
BATCH_SIZE = 10


class DiagnosticQueue:
    """Bounded FIFO of timestamped debug lines; oldest entries are dropped."""

    def __init__(
        self,
        max_entries: int = MAX_ENTRIES,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._entries: deque[str] = deque(maxlen=max_entries)
        self._lock = threading.Lock()
        self._clock = clock

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def push(self, message: str) -> None:
        entry = f"{self._clock().isoformat()} - {message}"
        with self._lock:
            self._entries.append(entry)

    def drain(self, limit: int = BATCH_SIZE) -> List[str]:
        """Pop up to ``limit`` entries, oldest first."""

        with self._lock:
            count = min(limit, len(self._entries))
            return [self._entries.popleft() for _ in range(count)]

    def drain_all(self) -> List[str]:
        with self._lock:
            entries = list(self._entries)
            self._entries.clear()
            return entries
