"""Append-only text file adapter.

Implements the core LogSinkPort on top of the local file system. Streams map
to ``<base>/<feature>/[<server>/]<name>.txt``.
"""

from __future__ import annotations

import os
from typing import Optional

from core.models import LogStream


class FileLogSink:
    """Thin file wrapper that satisfies the LogSinkPort contract."""

    def __init__(self, base_dir: str) -> None:
        self._base_dir = base_dir

    def directory_for(self, feature: str, server: Optional[str] = None) -> str:
        parts = [self._base_dir, feature]
        if server:
            parts.append(server)
        return os.path.join(*parts)

    def path_for(self, stream: LogStream) -> str:
        return os.path.join(self.directory_for(stream.feature, stream.server), stream.file_name)

    def ensure_directory(self, feature: str, server: Optional[str] = None) -> None:
        os.makedirs(self.directory_for(feature, server), exist_ok=True)

    def append(self, stream: LogStream, entry: str) -> None:
        """Append ``entry`` as-is, creating parent directories on demand."""

        path = self.path_for(stream)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "a", encoding="utf-8") as handle:
            handle.write(entry)
