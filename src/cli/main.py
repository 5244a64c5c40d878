"""gh-release command line.

One command per release operation. Commands are thin: they build the
client, run a single coroutine and render the responses with Rich.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, List, Optional

import httpx
import pydantic
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from adapters.http_client import HttpxTransport, build_async_client
from adapters.json_exporter import export_responses_json
from cli import doctor
from cli.ui_components import build_tags_table, print_response
from core.config import AppSettings
from core.domain.models import ResponseDescriptor
from core.errors import ReleaseClientError
from core.services.factory import build_release_client
from core.services.release_client import ReleaseClient

app = typer.Typer(no_args_is_help=True, help="Create, edit and discard releases; manage their assets.")
app.add_typer(doctor.app, name="doctor")

_console = Console()

Operation = Callable[[ReleaseClient], Awaitable[list[ResponseDescriptor]]]

_ENDPOINT_OPTION = typer.Option(None, "--endpoint", "-e", help="Endpoint name (defaults to settings).")
_REPO_OPTION = typer.Option(..., "--repo", "-r", help="Repository as owner/name.")
_OUTPUT_OPTION = typer.Option(None, "--output", "-o", help="Write the response body to a JSON file.")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _endpoint(settings: AppSettings, endpoint: str | None) -> str:
    return endpoint or settings.default_endpoint


def _run(settings: AppSettings, label: str, operation: Operation) -> list[ResponseDescriptor]:
    async def _go() -> list[ResponseDescriptor]:
        async with build_async_client(settings) as http:
            client = build_release_client(settings, transport=HttpxTransport(http))
            return await operation(client)

    try:
        responses = asyncio.run(_go())
    except (ReleaseClientError, OSError, httpx.HTTPError) as exc:
        _console.print(f"[red]{label} failed:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    return responses


def _execute(
    settings: AppSettings,
    label: str,
    operation: Operation,
    output: Optional[Path] = None,
) -> list[ResponseDescriptor]:
    responses = _run(settings, label, operation)
    for response in responses:
        print_response(_console, label, response)
    if output is not None:
        export_responses_json(responses=responses, output_path=output)
        _console.print(f"[green]Saved response to:[/green] {output}")
    if not all(r.ok for r in responses):
        raise typer.Exit(code=1)
    return responses


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Dump every request (token redacted)."),
) -> None:
    try:
        settings = AppSettings()
    except pydantic.ValidationError as exc:
        _console.print(f"[red]Invalid settings:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def create(
    tag: str = typer.Option(..., "--tag", "-t"),
    target: str = typer.Option("main", "--target", help="Branch or commit sha the tag points at."),
    title: str = typer.Option("", "--title"),
    note: str = typer.Option("", "--note"),
    draft: bool = typer.Option(False, "--draft"),
    prerelease: bool = typer.Option(False, "--prerelease"),
    repo: str = _REPO_OPTION,
    endpoint: Optional[str] = _ENDPOINT_OPTION,
    output: Optional[Path] = _OUTPUT_OPTION,
) -> None:
    """Create a release for TAG."""

    settings = AppSettings()
    name = _endpoint(settings, endpoint)

    async def op(client: ReleaseClient) -> list[ResponseDescriptor]:
        return [
            await client.create_release(
                name, repo, target=target, tag=tag, title=title or tag,
                note=note, draft=draft, prerelease=prerelease,
            )
        ]

    _execute(settings, "Create release", op, output)


@app.command()
def edit(
    tag: str = typer.Option(..., "--tag", "-t"),
    title: str = typer.Option("", "--title"),
    note: str = typer.Option("", "--note"),
    draft: bool = typer.Option(False, "--draft"),
    prerelease: bool = typer.Option(False, "--prerelease"),
    repo: str = _REPO_OPTION,
    endpoint: Optional[str] = _ENDPOINT_OPTION,
    output: Optional[Path] = _OUTPUT_OPTION,
) -> None:
    """Edit the release published under TAG."""

    settings = AppSettings()
    name = _endpoint(settings, endpoint)

    async def op(client: ReleaseClient) -> list[ResponseDescriptor]:
        return [
            await client.edit_release(
                name, repo, tag=tag, title=title or tag,
                note=note, draft=draft, prerelease=prerelease,
            )
        ]

    _execute(settings, "Edit release", op, output)


@app.command()
def discard(
    tag: str = typer.Option(..., "--tag", "-t"),
    repo: str = _REPO_OPTION,
    endpoint: Optional[str] = _ENDPOINT_OPTION,
) -> None:
    """Delete the release published under TAG."""

    settings = AppSettings()
    name = _endpoint(settings, endpoint)

    async def op(client: ReleaseClient) -> list[ResponseDescriptor]:
        return [await client.discard_release(name, repo, tag=tag)]

    _execute(settings, "Discard release", op)


@app.command()
def upload(
    files: List[Path] = typer.Argument(..., help="Files to attach."),
    upload_url: str = typer.Option(..., "--upload-url", "-u", help="The release's upload_url."),
    endpoint: Optional[str] = _ENDPOINT_OPTION,
    output: Optional[Path] = _OUTPUT_OPTION,
) -> None:
    """Upload one or more assets concurrently."""

    settings = AppSettings()
    name = _endpoint(settings, endpoint)

    async def op(client: ReleaseClient) -> list[ResponseDescriptor]:
        return list(
            await asyncio.gather(
                *(client.upload_release_asset(name, file_path=f, upload_url=upload_url) for f in files)
            )
        )

    _execute(settings, "Upload release asset", op, output)


@app.command(name="delete-asset")
def delete_asset(
    asset_id: str = typer.Argument(...),
    repo: str = _REPO_OPTION,
    endpoint: Optional[str] = _ENDPOINT_OPTION,
) -> None:
    """Delete a release asset by id."""

    settings = AppSettings()
    name = _endpoint(settings, endpoint)

    async def op(client: ReleaseClient) -> list[ResponseDescriptor]:
        return [await client.delete_release_asset(name, repo, asset_id=asset_id)]

    _execute(settings, "Delete release asset", op)


@app.command()
def branch(
    branch_name: str = typer.Argument(...),
    repo: str = _REPO_OPTION,
    endpoint: Optional[str] = _ENDPOINT_OPTION,
) -> None:
    """Show a branch."""

    settings = AppSettings()
    name = _endpoint(settings, endpoint)

    async def op(client: ReleaseClient) -> list[ResponseDescriptor]:
        return [await client.get_branch(name, repo, branch=branch_name)]

    _execute(settings, "Get branch", op)


@app.command()
def tags(
    repo: str = _REPO_OPTION,
    endpoint: Optional[str] = _ENDPOINT_OPTION,
    raw: bool = typer.Option(False, "--raw", help="Print the JSON body instead of a table."),
) -> None:
    """List the first page of tags."""

    settings = AppSettings()
    name = _endpoint(settings, endpoint)

    async def op(client: ReleaseClient) -> list[ResponseDescriptor]:
        return [await client.get_tags(name, repo)]

    if raw:
        _execute(settings, "Get tags", op)
        return

    response = _run(settings, "Get tags", op)[0]
    if not response.ok:
        print_response(_console, "Get tags", response)
        raise typer.Exit(code=1)
    _console.print(build_tags_table(response))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
