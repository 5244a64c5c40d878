"""Release operations against the hosting platform's REST API.

Each operation builds one `RequestDescriptor` (verb, URL, headers, body),
logs it at DEBUG and hands it to the injected `Transport`. Edit and discard
first resolve the tag to a release id with a fresh lookup; every other
operation returns the transport's response untouched, whatever its status.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from core.domain.models import (
    AUTHORIZATION_HEADER,
    HttpMethod,
    RequestDescriptor,
    ResponseDescriptor,
)
from core.errors import ReleaseLookupError
from core.interfaces.collaborators import (
    ApiBaseResolver,
    FileAccess,
    TokenResolver,
    Transport,
)

log = logging.getLogger(__name__)

_ID_KEY = "id"
_JSON_CONTENT_TYPE = "application/json"


class ReleaseClient:
    """Stateless request builder for releases, assets, tags and branches."""

    def __init__(
        self,
        *,
        token_resolver: TokenResolver,
        api_base_resolver: ApiBaseResolver,
        transport: Transport,
        file_access: FileAccess,
    ) -> None:
        self._tokens = token_resolver
        self._api_base = api_base_resolver
        self._transport = transport
        self._files = file_access

    async def create_release(
        self,
        endpoint: str,
        repo: str,
        *,
        target: str,
        tag: str,
        title: str,
        note: str,
        draft: bool = False,
        prerelease: bool = False,
    ) -> ResponseDescriptor:
        request = RequestDescriptor(
            method=HttpMethod.POST,
            url=f"{self._api_base.resolve_api_base(endpoint)}/repos/{repo}/releases",
            headers=self._json_headers(endpoint),
            body=json.dumps(
                {
                    "tag_name": tag,
                    "target_commitish": target,
                    "name": title,
                    "body": note,
                    "draft": draft,
                    "prerelease": prerelease,
                }
            ),
        )
        return await self._send("Create release", request)

    async def edit_release(
        self,
        endpoint: str,
        repo: str,
        *,
        tag: str,
        title: str,
        note: str,
        draft: bool = False,
        prerelease: bool = False,
    ) -> ResponseDescriptor:
        """Update the release published under `tag`.

        Raises `ReleaseLookupError` when the tag lookup does not return 200
        with a release id.
        """

        release_id = await self._release_id_for_tag(endpoint, repo, tag)
        request = RequestDescriptor(
            method=HttpMethod.PATCH,
            url=f"{self._api_base.resolve_api_base(endpoint)}/repos/{repo}/releases/{release_id}",
            headers=self._json_headers(endpoint),
            body=json.dumps(
                {
                    "tag_name": tag,
                    "name": title,
                    "body": note,
                    "draft": draft,
                    "prerelease": prerelease,
                }
            ),
        )
        return await self._send("Edit release", request)

    async def discard_release(self, endpoint: str, repo: str, *, tag: str) -> ResponseDescriptor:
        """Delete the release published under `tag` (the git tag itself stays)."""

        release_id = await self._release_id_for_tag(endpoint, repo, tag)
        request = RequestDescriptor(
            method=HttpMethod.DELETE,
            url=f"{self._api_base.resolve_api_base(endpoint)}/repos/{repo}/releases/{release_id}",
            headers=self._auth_headers(endpoint),
        )
        return await self._send("Discard release", request)

    async def delete_release_asset(self, endpoint: str, repo: str, *, asset_id: str | int) -> ResponseDescriptor:
        request = RequestDescriptor(
            method=HttpMethod.DELETE,
            url=f"{self._api_base.resolve_api_base(endpoint)}/repos/{repo}/releases/assets/{asset_id}",
            headers=self._auth_headers(endpoint),
        )
        return await self._send("Delete release asset", request)

    async def upload_release_asset(
        self,
        endpoint: str,
        *,
        file_path: str | Path,
        upload_url: str,
    ) -> ResponseDescriptor:
        """Stream a local file to a release.

        `upload_url` is the release's `upload_url` as returned by the API; its
        template suffix (`{?name,label}`) is dropped and `?name=<file name>`
        appended.
        """

        path = Path(file_path)
        file_name = path.name
        log.debug("Filename: %s", file_name)

        # Stat first so a missing file fails before anything is sent.
        size = self._files.size(path)

        headers = {
            "Content-Type": self._files.mime_type(file_name),
            "Content-Length": str(size),
        }
        headers.update(self._auth_headers(endpoint))

        request = RequestDescriptor(
            method=HttpMethod.POST,
            url=f"{upload_url.split('{')[0]}?name={file_name}",
            headers=headers,
            body=self._files.open_stream(path),
        )
        return await self._send("Upload release asset", request)

    async def get_branch(self, endpoint: str, repo: str, *, branch: str) -> ResponseDescriptor:
        request = RequestDescriptor(
            method=HttpMethod.GET,
            url=f"{self._api_base.resolve_api_base(endpoint)}/repos/{repo}/branches/{branch}",
            headers=self._auth_headers(endpoint),
        )
        return await self._send("Get branch", request)

    async def get_tags(self, endpoint: str, repo: str) -> ResponseDescriptor:
        """First page of the repository's tags, as the API returns it."""

        request = RequestDescriptor(
            method=HttpMethod.GET,
            url=f"{self._api_base.resolve_api_base(endpoint)}/repos/{repo}/tags",
            headers=self._auth_headers(endpoint),
        )
        return await self._send("Get tags", request)

    async def _get_release_by_tag(self, endpoint: str, repo: str, tag: str) -> ResponseDescriptor:
        request = RequestDescriptor(
            method=HttpMethod.GET,
            url=f"{self._api_base.resolve_api_base(endpoint)}/repos/{repo}/releases/tags/{tag}",
            headers=self._auth_headers(endpoint),
        )
        return await self._send("Get release by tag", request)

    async def _release_id_for_tag(self, endpoint: str, repo: str, tag: str) -> object:
        response = await self._get_release_by_tag(endpoint, repo, tag)
        reason = None
        if response.status_code != 200:
            reason = f"HTTP {response.status_code}"
        elif not isinstance(response.body, dict) or _ID_KEY not in response.body:
            # e.g. an SSO or proxy page served with 200
            reason = "HTTP 200 without a release id"
        if reason is not None:
            log.debug(
                "Get release by tag response:\n%s",
                json.dumps(response.model_dump(), indent=2, default=str),
            )
            raise ReleaseLookupError(repo, tag, response, reason)
        return response.body[_ID_KEY]

    def _auth_headers(self, endpoint: str) -> dict[str, str]:
        return {AUTHORIZATION_HEADER: f"token {self._tokens.resolve_token(endpoint)}"}

    def _json_headers(self, endpoint: str) -> dict[str, str]:
        headers = {"Content-Type": _JSON_CONTENT_TYPE}
        headers.update(self._auth_headers(endpoint))
        return headers

    async def _send(self, label: str, request: RequestDescriptor) -> ResponseDescriptor:
        log.debug("%s request:\n%s", label, json.dumps(request.redacted(), indent=2))
        return await self._transport.send(request)
