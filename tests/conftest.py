from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, AsyncIterator, Callable

import pytest

# Ensure 'src' is importable for all tests without per-file sys.path hacks.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from core.domain.models import RequestDescriptor, ResponseDescriptor  # noqa: E402
from core.services.release_client import ReleaseClient  # noqa: E402

API_BASE = "https://api.example.test"
TOKEN = "s3cr3t-token"


class FakeResolver:
    """Token + API base resolver that remembers which endpoints it was asked for."""

    def __init__(self, token: str = TOKEN, api_base: str = API_BASE) -> None:
        self.token = token
        self.api_base = api_base
        self.seen: list[str] = []

    def resolve_token(self, endpoint: str) -> str:
        self.seen.append(endpoint)
        return self.token

    def resolve_api_base(self, endpoint: str) -> str:
        self.seen.append(endpoint)
        return self.api_base


class RecordingTransport:
    """Records every request; answers from a handler (default: 200, empty body)."""

    def __init__(self, handler: Callable[[RequestDescriptor], ResponseDescriptor] | None = None) -> None:
        self.requests: list[RequestDescriptor] = []
        self._handler = handler or (lambda request: ResponseDescriptor(status_code=200))

    async def send(self, request: RequestDescriptor) -> ResponseDescriptor:
        self.requests.append(request)
        return self._handler(request)


class FakeFileAccess:
    def __init__(self, content: bytes = b"PK\x03\x04payload", mime: str = "application/zip") -> None:
        self.content = content
        self.mime = mime

    async def _chunks(self) -> AsyncIterator[bytes]:
        yield self.content

    def open_stream(self, path: Path) -> AsyncIterator[bytes]:
        return self._chunks()

    def size(self, path: Path) -> int:
        return len(self.content)

    def mime_type(self, file_name: str) -> str:
        return self.mime


def json_response(status_code: int, body: Any) -> ResponseDescriptor:
    return ResponseDescriptor(
        status_code=status_code,
        headers={"content-type": "application/json"},
        body=body,
    )


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def file_access() -> FakeFileAccess:
    return FakeFileAccess()


@pytest.fixture
def make_client(resolver: FakeResolver, file_access: FakeFileAccess):
    def _make(transport: RecordingTransport, files: Any = None) -> ReleaseClient:
        return ReleaseClient(
            token_resolver=resolver,
            api_base_resolver=resolver,
            transport=transport,
            file_access=files or file_access,
        )

    return _make
