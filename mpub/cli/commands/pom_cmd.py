from __future__ import annotations

from pathlib import Path

import typer

from mpub.cli.commands._helpers import exit_with_code, parse_version
from mpub.cli.context import build_context
from mpub.core.errors import ErrorCode
from mpub.core.result import Err
from mpub.output.errors import print_publish_error, publish_error_exit_code
from mpub.publish.metadata import assemble, render_pom


def pom(
    version: str = typer.Argument(..., help="Version written into the POM"),
    out: Path | None = typer.Option(None, "--out", help="Write to a file instead of stdout"),
) -> None:
    """Render the POM that would be published, without publishing."""
    ctx = build_context()
    artifact_version = parse_version(version, ctx.console)

    metadata = assemble(ctx.config.project)
    if isinstance(metadata, Err):
        print_publish_error(metadata.error, ctx.console)
        exit_with_code(publish_error_exit_code(metadata.error))

    text = render_pom(metadata.value, ctx.config.coordinates(artifact_version.value))
    if out is None:
        typer.echo(text, nl=False)
        return

    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8")
    except OSError as e:
        ctx.console.error(f"cannot write {out}: {e}")
        exit_with_code(int(ErrorCode.USER_ERROR))
    ctx.console.success(str(out))
