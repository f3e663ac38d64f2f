"""Private message extraction (core domain)."""

from __future__ import annotations

from typing import Iterable, Optional

from core.models import ConversationMatch
from core.patterns import DEFAULT_PATTERNS, MessagePattern, match_patterns


class ConversationExtractor:
    """Turn a timestamp-stripped chat line into a ConversationMatch.

    The extractor is stateless: it never looks at sessions, files, or time.
    """

    def __init__(self, patterns: Iterable[MessagePattern] = DEFAULT_PATTERNS) -> None:
        self._patterns = tuple(patterns)

    @property
    def patterns(self) -> tuple[MessagePattern, ...]:
        return self._patterns

    def extract(self, line: str) -> Optional[ConversationMatch]:
        if not line or not line.strip():
            return None
        return match_patterns(line, self._patterns)
