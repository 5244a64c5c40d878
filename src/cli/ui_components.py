"""UI components for the CLI (Rich).

Why separate components:
- Keeps command logic apart from rendering details.
- Tables/panels are reused across several commands.
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from core.domain.models import ResponseDescriptor


def _body_text(body: Any) -> str:
    if body is None:
        return ""
    if isinstance(body, (bytes, bytearray)):
        return f"<{len(body)} bytes>"
    return json.dumps(body, ensure_ascii=False, indent=2)


def build_response_panel(label: str, response: ResponseDescriptor) -> Panel:
    """Panel with the status line and the decoded body of a response."""

    style = "green" if response.ok else "red"
    title = Text.assemble((label, "bold"), "  ", (f"HTTP {response.status_code}", style))
    body = _body_text(response.body)
    if body:
        renderable: Any = Syntax(body, "json", word_wrap=True)
    else:
        renderable = Text("(empty body)", style="dim")
    return Panel(renderable, title=title, border_style=style)


def build_tags_table(response: ResponseDescriptor) -> Table:
    """Tag name + commit sha for a `tags` listing."""

    table = Table(title="Tags")
    table.add_column("Tag", style="cyan", no_wrap=True)
    table.add_column("Commit", style="white")
    for item in response.body or []:
        if not isinstance(item, dict):
            continue
        commit = item.get("commit") or {}
        table.add_row(str(item.get("name", "")), str(commit.get("sha", "")))
    return table


def print_response(console: Console, label: str, response: ResponseDescriptor) -> None:
    console.print(build_response_panel(label, response))
