"""Contracts for the collaborators of the release client.

Why Protocol:
- Structural (duck-typed) contracts without rigid inheritance.
- Adapters (settings-based resolver, httpx transport, local files) are
  swappable and testable with plain fakes.
"""

from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator, Protocol, runtime_checkable

from core.domain.models import RequestDescriptor, ResponseDescriptor


@runtime_checkable
class TokenResolver(Protocol):
    def resolve_token(self, endpoint: str) -> str:
        """Bearer token for `endpoint`; raises if it cannot be resolved."""

        ...


@runtime_checkable
class ApiBaseResolver(Protocol):
    def resolve_api_base(self, endpoint: str) -> str:
        """REST API base URL for `endpoint` (public or Enterprise)."""

        ...


@runtime_checkable
class Transport(Protocol):
    """Performs the network call.

    Rules:
    - `send` is async; connection/timeout/TLS errors propagate to the caller.
    - Non-2xx responses are returned, never raised.
    """

    async def send(self, request: RequestDescriptor) -> ResponseDescriptor:
        ...


@runtime_checkable
class FileAccess(Protocol):
    """Local file access used by asset uploads."""

    def open_stream(self, path: Path) -> AsyncIterator[bytes]:
        ...

    def size(self, path: Path) -> int:
        ...

    def mime_type(self, file_name: str) -> str:
        ...
