"""Private message pattern library (core domain).

Matchers are tried in a fixed priority order and the first accepted match
wins. Bracketed and anchored layouts sit ahead of the loose substring forms
that would otherwise mis-extract the correspondent name.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Callable, Iterable, Optional, Tuple, Union

from core.models import ConversationMatch, Direction

_LEADING_TAG = re.compile(r"^\[.*?\]\s*")
_TRAILING_TAG = re.compile(r"\s*\[.*?\]$")
_LEADING_STARS = re.compile(r"^\*+\s*")
_TRAILING_STARS = re.compile(r"\s*\*+$")


def extract_content(line: str, start: int) -> str:
    """Return the message body starting at ``start``, skipping one colon."""

    if start >= len(line):
        return ""
    if line[start] == ":":
        start += 1
    return line[start:].strip()


def clean_correspondent(name: str) -> str:
    """Strip rank tags like ``[VIP]`` and ``*`` decorations from a name."""

    name = _LEADING_TAG.sub("", name.strip())
    name = _TRAILING_TAG.sub("", name)
    name = _LEADING_STARS.sub("", name)
    name = _TRAILING_STARS.sub("", name)
    return name.strip()


@dataclass(frozen=True)
class PrefixPattern:
    """``<anchor><name>: <content>``, e.g. ``You tell Bob: hi``."""

    anchor: str
    direction: Direction

    def match(self, line: str) -> Optional[ConversationMatch]:
        if not line.startswith(self.anchor):
            return None
        colon = line.find(":")
        if colon < len(self.anchor):
            return None
        return ConversationMatch(
            correspondent=line[len(self.anchor):colon].strip(),
            content=extract_content(line, colon + 1),
            direction=self.direction,
        )


@dataclass(frozen=True)
class SubstringPattern:
    """``<name><anchor>[:] <content>``, e.g. ``Bob whispers to you: hi``."""

    anchor: str
    direction: Direction

    def match(self, line: str) -> Optional[ConversationMatch]:
        index = line.find(self.anchor)
        if index < 0:
            return None
        return ConversationMatch(
            correspondent=line[:index].strip(),
            content=extract_content(line, index + len(self.anchor)),
            direction=self.direction,
        )


# A custom extractor returns (correspondent, content) or None.
Extractor = Callable[[str], Optional[Tuple[str, str]]]


@dataclass(frozen=True)
class CustomPattern:
    """Layouts that cannot be expressed as an anchor plus a fixed offset."""

    name: str
    direction: Direction
    extract: Extractor

    def match(self, line: str) -> Optional[ConversationMatch]:
        extracted = self.extract(line)
        if extracted is None:
            return None
        correspondent, content = extracted
        return ConversationMatch(
            correspondent=correspondent,
            content=content,
            direction=self.direction,
        )


MessagePattern = Union[PrefixPattern, SubstringPattern, CustomPattern]


def _bracket_to_you(line: str) -> Optional[Tuple[str, str]]:
    # [Name -> You] content
    if not line.startswith("[") or " -> You]" not in line:
        return None
    arrow = line.index(" -> You]")
    if arrow <= 1:
        return None
    return line[1:arrow].strip(), extract_content(line, line.index("]") + 1)


def _bracket_from_you(line: str) -> Optional[Tuple[str, str]]:
    # [You -> Name] content
    prefix = "[You -> "
    if not line.startswith(prefix):
        return None
    bracket = line.find("]")
    if bracket <= len(prefix):
        return None
    return line[len(prefix):bracket].strip(), extract_content(line, bracket + 1)


def _upper_arrow_from_you(line: str) -> Optional[Tuple[str, str]]:
    # YOU -> Name: content
    prefix = "YOU -> "
    if not line.startswith(prefix):
        return None
    colon = line.find(":")
    if colon <= len(prefix):
        return None
    return line[len(prefix):colon].strip(), extract_content(line, colon)


def _upper_arrow_to_you(line: str) -> Optional[Tuple[str, str]]:
    # Name -> YOU: content
    marker = " -> YOU:"
    arrow = line.find(marker)
    if arrow <= 0:
        return None
    return line[:arrow].strip(), extract_content(line, arrow + len(marker))


_IN = Direction.INCOMING
_OUT = Direction.OUTGOING

DEFAULT_PATTERNS: Tuple[MessagePattern, ...] = (
    # Incoming
    SubstringPattern(" whispers to you", _IN),
    SubstringPattern(" tells you", _IN),
    SubstringPattern(" messages you", _IN),
    SubstringPattern(" -> you", _IN),
    SubstringPattern(" -> YOU", _IN),
    SubstringPattern(" whispers:", _IN),
    PrefixPattern("From ", _IN),
    PrefixPattern("from ", _IN),
    PrefixPattern("FROM ", _IN),
    CustomPattern("[Name -> You]", _IN, _bracket_to_you),
    # Outgoing
    PrefixPattern("You whisper to ", _OUT),
    PrefixPattern("You tell ", _OUT),
    PrefixPattern("You message ", _OUT),
    PrefixPattern("To ", _OUT),
    PrefixPattern("to ", _OUT),
    PrefixPattern("TO ", _OUT),
    PrefixPattern("you -> ", _OUT),
    PrefixPattern("YOU -> ", _OUT),
    CustomPattern("[You -> Name]", _OUT, _bracket_from_you),
    PrefixPattern("You -> ", _OUT),
    PrefixPattern("Reply to ", _OUT),
    CustomPattern("YOU -> Name:", _OUT, _upper_arrow_from_you),
    CustomPattern("Name -> YOU:", _IN, _upper_arrow_to_you),
)


def match_patterns(
    line: str, patterns: Iterable[MessagePattern] = DEFAULT_PATTERNS
) -> Optional[ConversationMatch]:
    """Return the first accepted match for ``line``.

    A match whose correspondent or content is empty after cleanup is
    discarded and the next pattern is tried.
    """

    for pattern in patterns:
        result = pattern.match(line)
        if result is None:
            continue
        correspondent = clean_correspondent(result.correspondent)
        if correspondent and result.content:
            return ConversationMatch(
                correspondent=correspondent,
                content=result.content,
                direction=result.direction,
            )
    return None
