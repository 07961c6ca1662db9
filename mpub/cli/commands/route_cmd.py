from __future__ import annotations

import typer

from mpub.cli.commands._helpers import parse_version
from mpub.cli.context import build_context
from mpub.publish.routing import route


def route_cmd(
    version: str = typer.Argument(..., help="Version to route"),
) -> None:
    """Show which repository a version would be published to."""
    ctx = build_context()
    target = route(parse_version(version, ctx.console), ctx.config.repositories)
    ctx.console.print(f"{target.kind}: {target.url}")
