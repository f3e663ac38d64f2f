from __future__ import annotations

from datetime import datetime

from core.config import CoordinateConfig
from core.coord_logger import COORDS_FEATURE, CoordinateLogger
from core.models import CoordinateKind, LogStream

SERVER = "play.example.net"


class FakeSink:
    def __init__(self) -> None:
        self.writes: list[tuple[LogStream, str]] = []
        self.directories: list[tuple[str, "str | None"]] = []
        self.fail = False

    def append(self, stream: LogStream, entry: str) -> None:
        if self.fail:
            raise OSError("disk full")
        self.writes.append((stream, entry))

    def ensure_directory(self, feature: str, server: "str | None" = None) -> None:
        self.directories.append((feature, server))


class FakeStatus:
    def __init__(self) -> None:
        self.infos: list[str] = []
        self.errors: list[str] = []

    def info(self, message: str) -> None:
        self.infos.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


def _logger(player_name: str = "Steve", **overrides):
    sink = FakeSink()
    status = FakeStatus()
    logger = CoordinateLogger(
        CoordinateConfig(**overrides),
        sink,
        status,
        SERVER,
        player_name=player_name,
        clock=lambda: datetime(2024, 1, 1, 12, 0, 0),
    )
    return logger, sink, status


def test_logs_xyz_leak() -> None:
    logger, sink, status = _logger()
    line = "<Alex> base at 2400 64 -3100"

    coords = logger.handle_line(line)

    assert coords is not None and coords.kind is CoordinateKind.XYZ
    assert sink.writes == [
        (
            LogStream(COORDS_FEATURE, None, f"ccl_{SERVER}"),
            "[2024-01-01 12:00:00] Player: Alex | Coords (XYZ): 2400, 64, -3100"
            " | Message: <Alex> base at 2400 64 -3100\n",
        )
    ]
    assert status.infos == [f"Logged XYZ coordinates from Alex to ccl_{SERVER}.txt"]


def test_logs_xz_leak_with_unknown_height() -> None:
    logger, sink, _ = _logger()
    logger.handle_line("<Alex> stash 5200 -4100")
    assert "Coords (XZ): 5200, ?, -4100" in sink.writes[0][1]


def test_own_coordinates_skipped_by_default() -> None:
    logger, sink, _ = _logger()
    assert logger.handle_line("<Steve> I'm at 2400 64 -3100") is None
    assert sink.writes == []


def test_own_coordinates_logged_when_enabled() -> None:
    logger, sink, _ = _logger(log_own_coordinates=True)
    assert logger.handle_line("<Steve> I'm at 2400 64 -3100") is not None
    assert len(sink.writes) == 1


def test_spawn_coordinates_are_not_logged() -> None:
    logger, sink, status = _logger()
    assert logger.handle_line("<Alex> spawn is 10 64 10") is None
    assert sink.writes == []
    assert status.infos == []


def test_write_failure_reported() -> None:
    logger, sink, status = _logger()
    sink.fail = True
    assert logger.handle_line("<Alex> base at 2400 64 -3100") is None
    assert status.errors == ["Failed to write coordinate log"]


def test_activate_reports_log_file() -> None:
    logger, sink, status = _logger()
    assert logger.activate()
    assert sink.directories == [(COORDS_FEATURE, None)]
    assert status.infos == [f"Chat Coordinate Logger activated. Current log file: ccl_{SERVER}.txt"]
