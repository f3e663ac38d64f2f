from __future__ import annotations

import asyncio
import io
from datetime import datetime
from pathlib import Path

import pytest

from adapters.chat_feed import ChatHost
from adapters.file_sink import FileLogSink
from core.archiver import MessageArchiver
from core.config import ArchiveConfig, CoordinateConfig
from core.coord_logger import CoordinateLogger

SERVER = "play.example.net"


class FakeStatus:
    def __init__(self) -> None:
        self.infos: list[str] = []
        self.errors: list[str] = []

    def info(self, message: str) -> None:
        self.infos.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


def _clock() -> datetime:
    return datetime(2024, 1, 1, 12, 0, 0)


def test_replay_archives_both_features(tmp_path: Path) -> None:
    sink = FileLogSink(str(tmp_path))
    status = FakeStatus()
    host = ChatHost(
        CoordinateLogger(CoordinateConfig(), sink, status, SERVER, player_name="Steve", clock=_clock),
        MessageArchiver(ArchiveConfig(), sink, status, SERVER, clock=_clock),
    )
    chat = io.StringIO(
        "<12:00> <Alex> base at 2400 64 -3100\n"
        "<12:01> PlayerA whispers to you: meet at base\n"
        "<12:02> <Steve> hello\n"
    )

    host.activate()
    asyncio.run(host.run(chat, tick_rate=50))
    host.deactivate()

    assert host.lines_seen == 3
    leaks = (tmp_path / "ChatCoordLeaks" / f"ccl_{SERVER}.txt").read_text(encoding="utf-8")
    assert "Player: Alex | Coords (XYZ): 2400, 64, -3100" in leaks

    archive = (tmp_path / "PrivateMessageArchiver" / SERVER / "playera.txt").read_text(
        encoding="utf-8"
    )
    assert "FROM PlayerA: meet at base" in archive
    # End of input disconnects, so the deactivate call finds nothing left open.
    assert archive.count("CONVERSATION ENDED WITH PLAYERA - DISCONNECTED") == 1
    assert "DEACTIVATED" not in archive
    assert status.errors == []


def test_tick_rate_must_be_positive() -> None:
    host = ChatHost(None, None)
    with pytest.raises(ValueError):
        asyncio.run(host.run(io.StringIO(""), tick_rate=0))
