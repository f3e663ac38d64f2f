"""Application entry point for the chatscribe watcher."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint

import settings
from adapters.chat_feed import DEFAULT_TICK_RATE, ChatHost
from adapters.console_status import ConsoleStatus
from adapters.file_sink import FileLogSink
from core.archiver import MessageArchiver
from core.coord_logger import COORDS_FEATURE, CoordinateLogger
from core.naming import server_key
from core.sessions import ARCHIVE_FEATURE

NAME = "CHATSCRIBE"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/chatscribe.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _resolve_server(args: argparse.Namespace) -> str:
    address = None if args.world else args.server
    return server_key(address=address, world_name=args.world, player_name=args.player)


def _build_host(args: argparse.Namespace) -> ChatHost:
    sink = FileLogSink(settings.BASE_DIR)
    server = _resolve_server(args)

    coord_logger = None
    if settings.COORDS_ENABLED:
        coord_logger = CoordinateLogger(
            config=settings.COORDINATES,
            sink=sink,
            status=ConsoleStatus("chat-coord-logger"),
            server=server,
            player_name=args.player,
        )

    archiver = None
    if settings.ARCHIVE_ENABLED:
        archiver = MessageArchiver(
            config=settings.ARCHIVE,
            sink=sink,
            status=ConsoleStatus("private-message-archiver"),
            server=server,
        )

    return ChatHost(coord_logger, archiver)


def _run(args: argparse.Namespace) -> None:
    _print_banner()
    _configure_logging()
    logger = logging.getLogger(__name__)

    if not args.player:
        raise RuntimeError("A player name is required (--player or CHATSCRIBE_PLAYER)")

    host = _build_host(args)
    host.activate()
    logger.info("Starting chatscribe as %s on %s", args.player, _resolve_server(args))

    # Explicit lifecycle: end of input disconnects, then the features shut down.
    try:
        if args.input:
            with open(args.input, "r", encoding="utf-8") as handle:
                asyncio.run(host.run(handle, tick_rate=args.tick_rate))
        else:
            asyncio.run(host.run(sys.stdin, tick_rate=args.tick_rate))
    except KeyboardInterrupt:
        logger.info("Interrupted, closing open sessions")
        host.disconnect()
    finally:
        host.deactivate()


def _paths(args: argparse.Namespace) -> None:
    sink = FileLogSink(settings.BASE_DIR)
    server = _resolve_server(args)
    print(f"{COORDS_FEATURE}: {os.path.abspath(sink.directory_for(COORDS_FEATURE))}")
    print(f"{ARCHIVE_FEATURE}: {os.path.abspath(sink.directory_for(ARCHIVE_FEATURE, server))}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="chatscribe")
    subparsers = parser.add_subparsers(dest="command")

    def _add_identity_args(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--player", default=os.getenv("CHATSCRIBE_PLAYER"), help="Local player name")
        where = sub.add_mutually_exclusive_group()
        where.add_argument("--server", default=os.getenv("CHATSCRIBE_SERVER"), help="Server address")
        where.add_argument("--world", help="Singleplayer world name")

    run_parser = subparsers.add_parser("run", help="Watch chat lines from a file or stdin")
    _add_identity_args(run_parser)
    run_parser.add_argument("--input", help="Chat log to replay (defaults to stdin)")
    run_parser.add_argument("--tick-rate", type=int, default=DEFAULT_TICK_RATE, help="Ticks per second")

    paths_parser = subparsers.add_parser("paths", help="Show where logs are written")
    _add_identity_args(paths_parser)

    args = parser.parse_args(argv)
    if args.command == "run" and args.tick_rate < 1:
        parser.error("--tick-rate must be at least 1")
    if args.command == "paths":
        _paths(args)
        return
    if args.command != "run":
        parser.print_help()
        return
    _run(args)


if __name__ == "__main__":
    main()
