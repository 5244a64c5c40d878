"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  Core to I/O libraries.
- Request/response descriptors can be dumped for debug logging as-is.

Note:
- These models describe *what* is sent and received, not *how* it travels.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, SecretStr
from pydantic.config import ConfigDict

AUTHORIZATION_HEADER = "Authorization"
_REDACTED = "***"


class HttpMethod(str, Enum):
    """Verbs used by the release operations."""

    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    DELETE = "DELETE"


class EndpointProfile(BaseModel):
    """A configured connection to one instance of the hosting platform."""

    url: str = Field(
        default="https://github.com",
        min_length=8,
        description="Web URL of the instance (github.com or an Enterprise host).",
    )
    api_url: str | None = Field(
        default=None,
        description="Explicit REST API base; overrides the value derived from `url`.",
    )
    token: SecretStr | None = Field(
        default=None,
        description="Personal access token used as `Authorization: token <...>`.",
    )


class RequestDescriptor(BaseModel):
    """A fully-formed request handed to the transport.

    `body` is either absent, a UTF-8 JSON string or an async byte stream
    (asset uploads). Instances are frozen once built.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    method: HttpMethod
    url: str = Field(..., min_length=1)
    headers: dict[str, str] = Field(default_factory=dict)
    body: Any = None

    def redacted(self) -> dict[str, Any]:
        """Loggable view: the Authorization credential is masked."""

        headers = dict(self.headers)
        if AUTHORIZATION_HEADER in headers:
            scheme = headers[AUTHORIZATION_HEADER].split(" ", 1)[0]
            headers[AUTHORIZATION_HEADER] = f"{scheme} {_REDACTED}"

        body: Any = self.body
        if body is not None and not isinstance(body, str):
            body = f"<{type(body).__name__}>"

        return {
            "method": self.method.value,
            "url": self.url,
            "headers": headers,
            "body": body,
        }


class ResponseDescriptor(BaseModel):
    """What the transport hands back: status, headers and the decoded body."""

    status_code: int = Field(..., ge=100, le=599)
    headers: dict[str, str] = Field(default_factory=dict)
    body: Any = Field(
        default=None,
        description="Parsed JSON for JSON responses, raw bytes otherwise.",
    )

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
