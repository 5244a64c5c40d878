"""Wiring of the release client with the default adapters.

Entry points (CLI, scripts, tests) call `build_release_client` instead of
assembling resolvers, transport and file access by hand.
"""

from __future__ import annotations

from adapters.endpoints import SettingsEndpointResolver
from adapters.http_client import HttpxTransport
from adapters.local_files import LocalFileAccess
from core.config import AppSettings
from core.interfaces.collaborators import Transport
from core.services.release_client import ReleaseClient


def build_release_client(
    settings: AppSettings | None = None,
    *,
    transport: Transport,
) -> ReleaseClient:
    """Release client resolving endpoints from `settings` and sending via `transport`.

    The caller owns the transport (and the `httpx.AsyncClient` behind it):
    ::

        async with build_async_client(settings) as http:
            client = build_release_client(settings, transport=HttpxTransport(http))
    """

    settings = settings or AppSettings()
    resolver = SettingsEndpointResolver(settings)
    return ReleaseClient(
        token_resolver=resolver,
        api_base_resolver=resolver,
        transport=transport,
        file_access=LocalFileAccess(chunk_size=settings.upload_chunk_size),
    )

