from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import typer

from mpub.core.config import Config, load_config
from mpub.core.errors import ErrorCode
from mpub.core.project import Project, detect_project
from mpub.core.properties import PropertyStore, load_property_store, user_properties_path
from mpub.core.result import Err
from mpub.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    project: Project
    config: Config
    properties: PropertyStore
    environ: Mapping[str, str]
    console: ConsoleProtocol


def build_context(*, properties_file: Path | None = None) -> CLIContext:
    """Detect the project and load its config and property store.

    Exits with USER_ERROR when the project or its config cannot be loaded.
    """
    project_result = detect_project()
    if isinstance(project_result, Err):
        typer.echo(f"error: {project_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    project = project_result.value

    config_result = load_config(project.config_path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    store_result = load_property_store(
        optional=(user_properties_path(), project.properties_path),
        required=(properties_file,) if properties_file is not None else (),
    )
    if isinstance(store_result, Err):
        typer.echo(f"error: {store_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(
        project=project,
        config=config_result.value,
        properties=store_result.value,
        environ=os.environ,
        console=RichConsole(),
    )
