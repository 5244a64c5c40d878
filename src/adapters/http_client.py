"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, default headers and response decoding.
- Eases testing: the core only sees the `Transport` contract, so a fake
  (or an `httpx.MockTransport`) can stand in for the network.
"""

from __future__ import annotations

from typing import Any

import httpx

from core.config import AppSettings
from core.domain.models import RequestDescriptor, ResponseDescriptor


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with safe defaults.

    Why a builder:
    - Keeps timeouts/headers identical for every operation.
    - `transport` lets tests plug in `httpx.MockTransport`.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/vnd.github+json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        return response.json()
    return response.content


class HttpxTransport:
    """`Transport` backed by a shared `httpx.AsyncClient`.

    Non-2xx responses are returned as descriptors; `httpx.HTTPError`
    (connect, timeout, TLS) propagates to the caller.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def send(self, request: RequestDescriptor) -> ResponseDescriptor:
        response = await self._client.request(
            request.method.value,
            request.url,
            headers=request.headers,
            content=request.body,
        )
        return ResponseDescriptor(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=_decode_body(response),
        )
