from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

import cli.main as cli_main
from core.config import AppSettings
from core.domain.models import EndpointProfile

runner = CliRunner()


@pytest.fixture
def api(monkeypatch):
    """Route the CLI's HTTP client to an in-memory handler; returns the request log."""

    calls: list[httpx.Request] = []
    routes: dict[tuple[str, str], httpx.Response] = {}

    settings = AppSettings(
        _env_file=None,
        endpoints={"github": EndpointProfile(token="tok-cli")},
    )

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return routes.get((request.method, request.url.path), httpx.Response(404, json={"message": "Not Found"}))

    def fake_client(settings_arg=None, **kwargs):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    monkeypatch.setattr(cli_main, "AppSettings", lambda: settings)
    monkeypatch.setattr(cli_main, "build_async_client", fake_client)
    return calls, routes


def test_create_writes_output(api, tmp_path: Path):
    calls, routes = api
    routes[("POST", "/repos/octo/demo/releases")] = httpx.Response(201, json={"id": 42, "tag_name": "v1.0"})
    out = tmp_path / "release.json"

    result = runner.invoke(
        cli_main.app,
        ["create", "--repo", "octo/demo", "--tag", "v1.0", "--draft", "--output", str(out)],
    )

    assert result.exit_code == 0, result.output
    assert calls[0].headers["authorization"] == "token tok-cli"
    assert json.loads(calls[0].content)["draft"] is True
    assert json.loads(calls[0].content)["name"] == "v1.0"
    assert json.loads(out.read_text(encoding="utf-8"))["id"] == 42


def test_discard_lookup_failure_exits_nonzero(api):
    calls, _ = api

    result = runner.invoke(cli_main.app, ["discard", "--repo", "octo/demo", "--tag", "v404"])

    assert result.exit_code == 1
    assert "failed" in result.output
    assert [c.method for c in calls] == ["GET"]


def test_error_status_exits_nonzero(api):
    calls, routes = api
    routes[("GET", "/repos/octo/demo/branches/nope")] = httpx.Response(404, json={"message": "Branch not found"})

    result = runner.invoke(cli_main.app, ["branch", "nope", "--repo", "octo/demo"])

    assert result.exit_code == 1
    assert "404" in result.output


def test_tags_table(api):
    _, routes = api
    routes[("GET", "/repos/octo/demo/tags")] = httpx.Response(
        200, json=[{"name": "v1.0", "commit": {"sha": "abc123"}}]
    )

    result = runner.invoke(cli_main.app, ["tags", "--repo", "octo/demo"])

    assert result.exit_code == 0, result.output
    assert "v1.0" in result.output
    assert "abc123" in result.output


def test_upload_multiple_files(api, tmp_path: Path):
    calls, routes = api
    routes[("POST", "/assets")] = httpx.Response(201, json={"id": 1})
    first = tmp_path / "a.txt"
    second = tmp_path / "b.txt"
    first.write_text("one", encoding="utf-8")
    second.write_text("three", encoding="utf-8")

    result = runner.invoke(
        cli_main.app,
        ["upload", str(first), str(second), "--upload-url", "https://upl.example/assets{?name,label}"],
    )

    assert result.exit_code == 0, result.output
    assert sorted(c.url.params["name"] for c in calls) == ["a.txt", "b.txt"]


def test_unknown_endpoint_is_reported(api):
    calls, _ = api

    result = runner.invoke(cli_main.app, ["tags", "--repo", "octo/demo", "--endpoint", "corp"])

    assert result.exit_code == 1
    assert "corp" in result.output
    assert calls == []


def test_doctor_lists_endpoints_with_masked_token(monkeypatch):
    import cli.doctor as doctor

    settings = AppSettings(
        _env_file=None,
        endpoints={
            "github": EndpointProfile(token="ghp_0123456789abcdef"),
            "corp": EndpointProfile(url="https://git.corp.example"),
        },
    )
    monkeypatch.setattr(cli_main, "AppSettings", lambda: settings)
    monkeypatch.setattr(doctor, "AppSettings", lambda: settings)

    result = runner.invoke(cli_main.app, ["doctor", "run", "--no-network"])

    assert result.exit_code == 0, result.output
    assert "ghp_0123456789abcdef" not in result.output
    assert "MISSING" in result.output
    assert "corp" in result.output


def test_discard_html_lookup_page_exits_cleanly(api):
    calls, routes = api
    routes[("GET", "/repos/octo/demo/releases/tags/v1.0")] = httpx.Response(
        200, content=b"<html>login</html>", headers={"content-type": "text/html"}
    )

    result = runner.invoke(cli_main.app, ["discard", "--repo", "octo/demo", "--tag", "v1.0"])

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "failed" in result.output
    assert [c.method for c in calls] == ["GET"]


def test_invalid_log_level_is_a_settings_error(monkeypatch):
    monkeypatch.setenv("GH_RELEASE_LOG_LEVEL", "verbose")

    result = runner.invoke(cli_main.app, ["tags", "--repo", "octo/demo"])

    assert result.exit_code == 2
    assert "Invalid settings" in result.output
