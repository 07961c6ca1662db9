from __future__ import annotations

from pathlib import Path

import typer

from mpub.cli.commands._helpers import exit_with_code, parse_version
from mpub.cli.context import CLIContext, build_context
from mpub.core.result import Err
from mpub.output.console import Style
from mpub.output.errors import print_publish_error, publish_error_exit_code
from mpub.publish.bundle import build
from mpub.publish.credentials import resolve, resolve_value
from mpub.publish.metadata import assemble
from mpub.publish.routing import route
from mpub.publish.service import publish
from mpub.publish.signing import GpgSigner
from mpub.publish.upload import HttpUploader

SIGNING_PASSWORD_KEY = "signingPassword"


def _signer(ctx: CLIContext) -> GpgSigner:
    signing = ctx.config.signing
    return GpgSigner(
        gpg=signing.gpg,
        key_id=signing.key_id,
        passphrase=resolve_value(
            SIGNING_PASSWORD_KEY, properties=ctx.properties, environ=ctx.environ
        ),
        timeout=ctx.config.timeouts.signing,
    )


def _uploader(ctx: CLIContext) -> HttpUploader:
    return HttpUploader(
        timeout=ctx.config.timeouts.upload,
        publishing_type=ctx.config.publishing.publishing_type,
    )


def publish_cmd(
    version: str = typer.Argument(..., help="Version to publish (e.g. 0.1.1 or 0.1.1-SNAPSHOT)"),
    jar: Path | None = typer.Option(None, "--jar", help="Primary artifact (compiled library)"),
    sources: Path | None = typer.Option(
        None, "--sources", exists=True, dir_okay=False, help="Sources jar"
    ),
    javadoc: Path | None = typer.Option(
        None, "--javadoc", exists=True, dir_okay=False, help="Javadoc jar"
    ),
    sign: bool | None = typer.Option(
        None, "--sign/--no-sign", help="Sign the bundle (default: [signing] enabled)"
    ),
    credential: str | None = typer.Option(
        None, "--credential", help="Credential name to resolve (default: [publishing] credential)"
    ),
    properties: Path | None = typer.Option(
        None, "--properties", help="Extra properties file (highest priority)"
    ),
) -> None:
    """Publish a built library to the snapshot or release repository."""
    ctx = build_context(properties_file=properties)
    config = ctx.config
    console = ctx.console

    artifact_version = parse_version(version, console)
    coordinates = config.coordinates(artifact_version.value)
    target = route(artifact_version, config.repositories)

    metadata = assemble(config.project)
    if isinstance(metadata, Err):
        print_publish_error(metadata.error, console)
        exit_with_code(publish_error_exit_code(metadata.error))

    bundle = build(jar, sources, javadoc, metadata=metadata.value, coordinates=coordinates)
    if isinstance(bundle, Err):
        print_publish_error(bundle.error, console)
        exit_with_code(publish_error_exit_code(bundle.error))

    credential_name = credential or config.publishing.credential
    resolved = resolve(credential_name, properties=ctx.properties, environ=ctx.environ)
    signing_enabled = config.signing.enabled if sign is None else sign

    console.header(f"Publish {coordinates.gav} ({target.kind})")
    result = publish(
        bundle.value,
        target,
        resolved,
        signing_enabled,
        signer=_signer(ctx) if signing_enabled else None,
        uploader=_uploader(ctx),
        console=console,
        credential_name=credential_name,
    )
    if isinstance(result, Err):
        print_publish_error(result.error, console)
        exit_with_code(publish_error_exit_code(result.error))

    published = result.value
    console.success(
        f"{published.artifact_count} artifact(s), {published.uploaded_files} file(s) "
        f"-> {published.target_url} ({published.signing_state})"
    )
    if published.deployment_id:
        console.print(f"deployment: {published.deployment_id}", Style.DIM)
    if target.kind == "release" and config.publishing.publishing_type == "USER_MANAGED":
        console.print("hint: promote the deployment on the portal to make it public", Style.DIM)
