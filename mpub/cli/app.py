from __future__ import annotations

import os
from pathlib import Path

import typer

from mpub import __version__
from mpub.cli.commands.pom_cmd import pom
from mpub.cli.commands.publish_cmd import publish_cmd
from mpub.cli.commands.route_cmd import route_cmd
from mpub.core.errors import ErrorCode
from mpub.core.project import is_project_root


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command("publish")(publish_cmd)
app.command()(pom)
app.command("route")(route_cmd)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    project: Path | None = typer.Option(
        None,
        "--project",
        help="Project root containing mpub.toml (overrides auto detection)",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if project is not None:
        try:
            root = project.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --project: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not root.is_dir() or not is_project_root(root):
            typer.echo(f"error: --project '{root}' has no mpub.toml", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        os.environ["MPUB_PROJECT_ROOT"] = str(root)


def main() -> None:
    app()
