"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking into the CLI.
- Lets adapters (HTTP, endpoint resolution) read configuration consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import EndpointProfile


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "gh-release"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "gh-release"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "gh-release"
    return Path.home() / ".config" / "gh-release"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Write or update variables in the user's global .env."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# gh-release user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application settings.

    Endpoint profiles are read from nested variables, e.g.
    `GH_RELEASE_ENDPOINTS__GITHUB__TOKEN=...` or
    `GH_RELEASE_ENDPOINTS__CORP__URL=https://git.corp.example`.
    """

    model_config = SettingsConfigDict(
        env_prefix="GH_RELEASE_",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
        # Project .env first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="gh-release-client/0.1",
        min_length=1,
        description="User-Agent sent with every API request.",
    )

    default_endpoint: str = Field(
        default="github",
        min_length=1,
        description="Endpoint name used when a command does not pass one.",
    )
    endpoints: dict[str, EndpointProfile] = Field(
        default_factory=dict,
        description="Named connection profiles (base URL + credentials).",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Root log level for the CLI (DEBUG dumps every request).",
    )
    upload_chunk_size: int = Field(
        default=64 * 1024,
        ge=1024,
        description="Read size (bytes) used when streaming asset uploads.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value
