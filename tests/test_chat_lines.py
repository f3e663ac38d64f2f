from __future__ import annotations

from core.chat_lines import (
    extract_sender,
    has_conversation_keywords,
    is_own_message,
    strip_timestamp,
)
from core.naming import UNKNOWN_SERVER, sanitize_file_name, server_key


def test_strip_timestamp() -> None:
    assert strip_timestamp("<9:05> hello") == "hello"
    assert strip_timestamp("<12:34>hi") == "hi"
    assert strip_timestamp("<Steve> hi") == "<Steve> hi"
    assert strip_timestamp("no prefix <12:34>") == "no prefix <12:34>"


def test_extract_sender_layouts() -> None:
    assert extract_sender("<Steve> hello") == "Steve"
    assert extract_sender("[Mod] watch it") == "Mod"
    assert extract_sender("Alex: hi there") == "Alex"
    assert extract_sender("server restarting soon") == "Unknown"


def test_is_own_message() -> None:
    assert is_own_message("<Steve> hello", "Steve")
    assert not is_own_message("<Alex> hello", "Steve")
    assert not is_own_message("<Steve> hello", None)


def test_conversation_keywords() -> None:
    assert has_conversation_keywords("Someone WHISPERED to you")
    assert has_conversation_keywords("Alice -> Bob hi")
    assert not has_conversation_keywords("<Steve> nice base")


def test_sanitize_file_name() -> None:
    assert sanitize_file_name('Bad:Name?"x"') == "bad_name__x_"
    assert sanitize_file_name("Notch") == "notch"


def test_server_key_from_address() -> None:
    assert server_key(address="Play.Example.net:25565") == "play.example.net"
    assert server_key(address=":25565") == UNKNOWN_SERVER


def test_server_key_singleplayer_fallbacks() -> None:
    assert server_key(world_name="My World") == "my world"
    assert server_key(world_name="  ", player_name="Steve") == "steve_world"
    assert server_key(world_name="") == "singleplayer_unknown"
    assert server_key() == UNKNOWN_SERVER
