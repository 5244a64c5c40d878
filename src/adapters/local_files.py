"""Local file access for asset uploads."""

from __future__ import annotations

import asyncio
import mimetypes
from pathlib import Path
from typing import AsyncIterator

DEFAULT_MIME_TYPE = "application/octet-stream"


class LocalFileAccess:
    def __init__(self, chunk_size: int = 64 * 1024) -> None:
        self._chunk_size = chunk_size

    async def _iter_chunks(self, path: Path) -> AsyncIterator[bytes]:
        with path.open("rb") as fh:
            while True:
                chunk = await asyncio.to_thread(fh.read, self._chunk_size)
                if not chunk:
                    break
                yield chunk

    def open_stream(self, path: Path) -> AsyncIterator[bytes]:
        """Lazy chunked reader; the file is opened when iteration starts."""

        return self._iter_chunks(path)

    def size(self, path: Path) -> int:
        return path.stat().st_size

    def mime_type(self, file_name: str) -> str:
        guessed, _ = mimetypes.guess_type(file_name)
        return guessed or DEFAULT_MIME_TYPE
