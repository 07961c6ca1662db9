"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from mpub.core.errors import ErrorCode
from mpub.publish.version import ArtifactVersion

if TYPE_CHECKING:
    from mpub.output.console import ConsoleProtocol


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)


def parse_version(value: str, console: ConsoleProtocol) -> ArtifactVersion:
    """Parse a version argument, exiting with USER_ERROR if it is blank."""
    try:
        return ArtifactVersion(value)
    except ValueError as e:
        console.error(str(e))
        exit_with_code(int(ErrorCode.USER_ERROR))
