"""Doctor command for endpoint diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.endpoints import api_base_for
from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Endpoint diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings, url: str) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__


def _mask(token: str) -> str:
    if len(token) <= 8:
        return "***"
    return f"{token[:4]}***{token[-2:]}"


@app.command()
def run(
    check_network: bool = typer.Option(True, "--network/--no-network", help="Probe each API base."),
) -> None:
    """Show configured endpoints and check that their APIs answer."""

    settings = AppSettings()

    table = Table(title="gh-release Doctor")
    table.add_column("Endpoint", style="bright_green", no_wrap=True)
    table.add_column("API base", style="white")
    table.add_column("Token", style="white")
    table.add_column("Connectivity", style="dim")

    if not settings.endpoints:
        _console.print(
            "[yellow]No endpoints configured.[/yellow] Run `gh-release doctor setup-endpoint`."
        )
        raise typer.Exit(code=1)

    for name, profile in sorted(settings.endpoints.items()):
        base = api_base_for(profile)
        token = profile.token.get_secret_value() if profile.token else ""
        token_cell = _mask(token) if token else "[red]MISSING[/red]"
        if check_network:
            ok, detail = asyncio.run(_check_http(settings, base))
            connectivity = detail if ok else f"[red]FAIL[/red] {detail}"
        else:
            connectivity = "skipped"
        marker = " (default)" if name.lower() == settings.default_endpoint.lower() else ""
        table.add_row(name + marker, base, token_cell, connectivity)

    _console.print(table)


@app.command(name="setup-endpoint")
def setup_endpoint() -> None:
    """Interactive endpoint setup (stores config in the user config .env)."""

    name = typer.prompt("Endpoint name", default="github", show_default=True).strip().lower()
    url = typer.prompt("Instance URL", default="https://github.com", show_default=True).strip()
    token = typer.prompt("Access token", hide_input=True, confirmation_prompt=False).strip()

    if not name or not url or not token:
        raise typer.BadParameter("name, url and token are required")

    prefix = f"GH_RELEASE_ENDPOINTS__{name.upper()}"
    env_path = write_user_env_vars(
        {
            f"{prefix}__URL": url,
            f"{prefix}__TOKEN": token,
        }
    )

    _console.print(f"[green]Saved endpoint '{name}' to:[/green] {env_path}")
