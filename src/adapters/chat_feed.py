"""Chat host adapter.

Feeds raw chat lines and periodic ticks into the core services. Both run as
tasks on one asyncio loop, so core state is only touched from that loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Optional, TextIO

from core.archiver import MessageArchiver
from core.coord_logger import CoordinateLogger

LOGGER = logging.getLogger(__name__)

DEFAULT_TICK_RATE = 20


async def iter_lines(stream: TextIO) -> AsyncIterator[str]:
    """Yield lines from a blocking text stream without blocking the loop."""

    loop = asyncio.get_running_loop()
    while True:
        line = await loop.run_in_executor(None, stream.readline)
        if not line:
            return
        yield line.rstrip("\r\n")


class ChatHost:
    """Delivers chat events to both features in the order they arrive."""

    def __init__(
        self,
        coord_logger: Optional[CoordinateLogger],
        archiver: Optional[MessageArchiver],
    ) -> None:
        self._coord_logger = coord_logger
        self._archiver = archiver
        self.lines_seen = 0

    def activate(self) -> None:
        if self._coord_logger:
            self._coord_logger.activate()
        if self._archiver:
            self._archiver.activate()

    def deliver(self, line: str) -> None:
        self.lines_seen += 1
        if self._coord_logger:
            self._coord_logger.handle_line(line)
        if self._archiver:
            self._archiver.handle_line(line)

    def tick(self) -> None:
        if self._archiver:
            self._archiver.on_tick()

    def disconnect(self) -> None:
        if self._archiver:
            self._archiver.on_disconnect()

    def deactivate(self) -> None:
        if self._archiver:
            self._archiver.deactivate()

    async def _pump_ticks(self, tick_rate: int, stop: asyncio.Event) -> None:
        interval = 1.0 / tick_rate
        while not stop.is_set():
            self.tick()
            try:
                await asyncio.wait_for(stop.wait(), timeout=interval)
            except asyncio.TimeoutError:
                continue

    async def run(self, stream: TextIO, tick_rate: int = DEFAULT_TICK_RATE) -> None:
        """Replay ``stream`` line by line; end of input counts as a disconnect."""

        if tick_rate < 1:
            raise ValueError(f"tick_rate must be at least 1, got {tick_rate}")
        stop = asyncio.Event()
        ticker = asyncio.create_task(self._pump_ticks(tick_rate, stop))
        try:
            async for line in iter_lines(stream):
                self.deliver(line)
        finally:
            stop.set()
            await ticker

        LOGGER.info("End of chat input after %s lines", self.lines_seen)
        self.disconnect()
