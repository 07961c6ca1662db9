"""Publishing orchestration.

States: Assembled -> Signed? -> Uploaded -> Done, with any step able to end
in Failed. Nothing is retried here; a failed publish leaves no local state
behind and can simply be run again.
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from pathlib import Path

from mpub.core.result import Err, Ok, Result
from mpub.output.console import ConsoleProtocol, Style
from mpub.publish.bundle import ArtifactBundle
from mpub.publish.credentials import Credential
from mpub.publish.errors import MissingCredential, PublishError, SigningFailed, UploadFailed
from mpub.publish.layout import SigningState, StagedDeployment, stage
from mpub.publish.routing import RepositoryTarget
from mpub.publish.signing import Signer
from mpub.publish.upload import Uploader


@dataclass(frozen=True, slots=True)
class PublishResult:
    target_url: str
    artifact_count: int
    signing_state: SigningState
    uploaded_files: int
    deployment_id: str | None = None


def _sign(
    deployment: StagedDeployment,
    signer: Signer | None,
    console: ConsoleProtocol,
) -> Result[StagedDeployment, PublishError]:
    if signer is None:
        first = deployment.files[0].name if deployment.files else "bundle"
        return Err(SigningFailed(artifact=first, reason="no signing capability configured"))

    signatures: dict[str, Path] = {}
    for staged in deployment.files:
        console.print(f"sign {staged.name}", Style.DIM)
        result = signer.sign(staged.local)
        if isinstance(result, Err):
            return result
        signatures[staged.remote_path] = result.value
    return Ok(deployment.signed(signatures))


def publish(
    bundle: ArtifactBundle,
    target: RepositoryTarget,
    credential: Credential | None,
    signing_enabled: bool,
    *,
    signer: Signer | None,
    uploader: Uploader,
    console: ConsoleProtocol,
    credential_name: str = "credential",
) -> Result[PublishResult, PublishError]:
    """Stage, optionally sign, and upload `bundle` to `target`.

    Returns:
        Ok(PublishResult) on success
        Err(PublishError) on failure; SigningFailed, Timeout from signing and
        MissingCredential are all returned before the uploader is called.
    """
    with tempfile.TemporaryDirectory(prefix="mpub-") as tmp:
        try:
            deployment = stage(bundle, Path(tmp))
        except OSError as e:
            return Err(UploadFailed(url=target.url, cause=f"staging failed: {e}"))

        if signing_enabled:
            signed = _sign(deployment, signer, console)
            if isinstance(signed, Err):
                return signed
            deployment = signed.value

        if target.requires_auth and credential is None:
            return Err(MissingCredential(name=credential_name))

        console.info(f"upload {bundle.coordinates.gav} -> {target.url}")
        uploaded = uploader.upload(deployment, target, credential)
        if isinstance(uploaded, Err):
            return uploaded

        receipt = uploaded.value
        return Ok(
            PublishResult(
                target_url=receipt.url,
                artifact_count=len(bundle.artifacts),
                signing_state=deployment.state,
                uploaded_files=receipt.uploaded_files,
                deployment_id=receipt.deployment_id,
            )
        )
