"""Error presentation utilities.

Centralized error formatting and exit code mapping for the publish command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mpub.core.errors import ErrorCode
from mpub.output.console import Style
from mpub.publish.credentials import env_var_name, password_key, username_key
from mpub.publish.errors import (
    MissingCredential,
    MissingMetadataField,
    MissingPrimaryArtifact,
    PublishError,
    SigningFailed,
    Timeout,
    UploadFailed,
)

if TYPE_CHECKING:
    from mpub.output.console import ConsoleProtocol

__all__ = ["print_publish_error", "publish_error_exit_code"]


def print_publish_error(error: PublishError, console: ConsoleProtocol) -> None:
    """Print a publish error with a hint line where one helps."""
    match error:
        case MissingMetadataField(field=field):
            console.error(f"missing metadata field: {field}")
            console.print("hint: add it to the [project] table of mpub.toml", Style.DIM)
        case MissingPrimaryArtifact(name=name):
            console.error(f"artifact not found: {name}")
            console.print("hint: build the library first, then pass --jar", Style.DIM)
        case MissingCredential(name=name):
            user_key, pass_key = username_key(name), password_key(name)
            console.error(f"credential '{name}' is not configured")
            console.print(
                f"hint: set {user_key}/{pass_key} in mpub.properties "
                f"or {env_var_name(user_key)}/{env_var_name(pass_key)} in the environment",
                Style.DIM,
            )
        case SigningFailed(artifact=artifact, reason=reason):
            console.error(f"signing failed for {artifact}: {reason}")
            console.print("hint: nothing was uploaded", Style.DIM)
        case UploadFailed():
            console.error(f"upload failed: {error}")
        case Timeout(operation=operation, seconds=seconds):
            console.error(f"timed out after {seconds:g}s: {operation}")
            console.print("hint: raise the limit in [timeouts] of mpub.toml", Style.DIM)


def publish_error_exit_code(error: PublishError) -> int:
    """Get exit code for a publish error."""
    match error:
        case MissingMetadataField() | MissingPrimaryArtifact():
            return int(ErrorCode.USER_ERROR)
        case MissingCredential():
            return int(ErrorCode.ENV_ERROR)
        case SigningFailed():
            return int(ErrorCode.SIGNING_ERROR)
        case UploadFailed():
            return int(ErrorCode.NETWORK_ERROR)
        case Timeout():
            return int(ErrorCode.TIMEOUT)
    return int(ErrorCode.USER_ERROR)
