"""Errors raised by the Core.

Transport failures (`httpx.HTTPError`) and local I/O failures (`OSError`)
are not wrapped: they reach the caller unchanged.
"""

from __future__ import annotations

from core.domain.models import ResponseDescriptor


class ReleaseClientError(Exception):
    """Base class for errors raised by the release client."""


class EndpointNotConfiguredError(ReleaseClientError):
    """The endpoint is unknown or has no usable credentials."""

    def __init__(self, endpoint: str, reason: str = "not configured") -> None:
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"Endpoint '{endpoint}' {reason}.")


class ReleaseLookupError(ReleaseClientError):
    """Resolving a tag to a release failed; no mutation was attempted."""

    def __init__(
        self,
        repo: str,
        tag: str,
        response: ResponseDescriptor,
        reason: str | None = None,
    ) -> None:
        self.repo = repo
        self.tag = tag
        self.response = response
        self.reason = reason or f"HTTP {response.status_code}"
        super().__init__(f"Failed to get release with tag '{tag}' in {repo} ({self.reason}).")
