"""Endpoint resolution from settings.

Turns an endpoint name into the two things the release client needs:
the `Authorization` token and the REST API base URL. Public GitHub and
GitHub Enterprise Server expose the API at different places.
"""

from __future__ import annotations

from urllib.parse import urlparse

from core.config import AppSettings
from core.domain.models import EndpointProfile
from core.errors import EndpointNotConfiguredError

PUBLIC_WEB_HOST = "github.com"
PUBLIC_API_URL = "https://api.github.com"
ENTERPRISE_API_PATH = "/api/v3"


def api_base_for(profile: EndpointProfile) -> str:
    """API base for a profile: explicit override, public API, or `<url>/api/v3`."""

    if profile.api_url:
        return profile.api_url.rstrip("/")

    host = (urlparse(profile.url).hostname or "").lower()
    if host in (PUBLIC_WEB_HOST, f"www.{PUBLIC_WEB_HOST}", "api.github.com"):
        return PUBLIC_API_URL
    return profile.url.rstrip("/") + ENTERPRISE_API_PATH


class SettingsEndpointResolver:
    """Resolves tokens and API bases from `AppSettings.endpoints`."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    def _profile(self, endpoint: str) -> EndpointProfile:
        # Settings keys are case-insensitive when read from the environment.
        profiles = {name.lower(): p for name, p in self._settings.endpoints.items()}
        profile = profiles.get(endpoint.lower())
        if profile is None:
            raise EndpointNotConfiguredError(endpoint)
        return profile

    def resolve_token(self, endpoint: str) -> str:
        profile = self._profile(endpoint)
        token = profile.token.get_secret_value().strip() if profile.token else ""
        if not token:
            raise EndpointNotConfiguredError(endpoint, "has no token")
        return token

    def resolve_api_base(self, endpoint: str) -> str:
        return api_base_for(self._profile(endpoint))
