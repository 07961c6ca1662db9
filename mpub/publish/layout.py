"""Maven repository layout of a bundle, staged on local disk.

Staging copies every artifact into `<group path>/<artifactId>/<version>/`
under a private directory, writes the POM next to them, and adds checksum
sidecars. Signatures are added later by the publisher. Uploaders only ever
read from a staged deployment.

Design goals:

- Deterministic file order (artifacts in bundle order, POM last)
- Nothing outside the staging directory is written
"""

from __future__ import annotations

import hashlib
import shutil
from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Literal
from zipfile import ZIP_DEFLATED, ZipFile

from mpub.publish.bundle import ArtifactBundle
from mpub.publish.metadata import render_pom

CHECKSUM_ALGORITHMS: tuple[str, ...] = ("md5", "sha1", "sha256", "sha512")

StagedKind = Literal["artifact", "pom"]


class SigningState(Enum):
    UNSIGNED = "unsigned"
    SIGNED = "signed"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class StagedFile:
    local: Path
    remote_path: str  # relative to the repository root, POSIX separators
    kind: StagedKind
    checksums: tuple[Path, ...] = ()
    signature: Path | None = None

    @property
    def name(self) -> str:
        return self.local.name


@dataclass(frozen=True, slots=True)
class StagedDeployment:
    bundle: ArtifactBundle
    root: Path
    files: tuple[StagedFile, ...]
    state: SigningState = SigningState.UNSIGNED

    @property
    def version_dir(self) -> str:
        c = self.bundle.coordinates
        return f"{c.group_path}/{c.artifact_id}/{c.version}"

    def signed(self, signatures: Mapping[str, Path]) -> StagedDeployment:
        """Return a copy in SIGNED state.

        Args:
            signatures: remote_path -> signature file, one per staged file

        Raises:
            ValueError: if already signed or a staged file has no signature.
        """
        if self.state is SigningState.SIGNED:
            raise ValueError("deployment is already signed")
        missing = [f.remote_path for f in self.files if f.remote_path not in signatures]
        if missing:
            raise ValueError(f"missing signatures: {', '.join(missing)}")
        files = tuple(replace(f, signature=signatures[f.remote_path]) for f in self.files)
        return replace(self, files=files, state=SigningState.SIGNED)

    def upload_entries(self) -> list[tuple[Path, str]]:
        """(local, remote_path) pairs in upload order.

        Each artifact is followed by its sidecars and signature. The POM's
        sidecars come before the POM itself, which is always the last entry.
        """
        entries: list[tuple[Path, str]] = []
        pom_entry: tuple[Path, str] | None = None
        for f in self.files:
            main = (f.local, f.remote_path)
            extras = [(p, f"{f.remote_path}{p.suffix}") for p in f.checksums]
            if f.signature is not None:
                extras.append((f.signature, f"{f.remote_path}.asc"))
            if f.kind == "pom":
                entries += extras
                pom_entry = main
            else:
                entries.append(main)
                entries += extras
        if pom_entry is not None:
            entries.append(pom_entry)
        return entries


def _digest_file(path: Path) -> dict[str, str]:
    hashes = {alg: hashlib.new(alg) for alg in CHECKSUM_ALGORITHMS}
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            for h in hashes.values():
                h.update(chunk)
    return {alg: h.hexdigest() for alg, h in hashes.items()}


def write_checksums(path: Path) -> tuple[Path, ...]:
    """Write `<file>.<alg>` sidecars next to `path` and return them."""
    out: list[Path] = []
    for alg, hexdigest in _digest_file(path).items():
        sidecar = path.with_name(f"{path.name}.{alg}")
        sidecar.write_text(hexdigest, encoding="ascii")
        out.append(sidecar)
    return tuple(out)


def stage(bundle: ArtifactBundle, staging_dir: Path) -> StagedDeployment:
    """Lay the bundle out under `staging_dir`.

    Raises:
        OSError: if an artifact cannot be copied or a file cannot be written.
    """
    c = bundle.coordinates
    version_dir = f"{c.group_path}/{c.artifact_id}/{c.version}"
    target_dir = staging_dir / version_dir
    target_dir.mkdir(parents=True, exist_ok=True)

    files: list[StagedFile] = []
    for artifact in bundle.artifacts:
        name = artifact.remote_name(c)
        local = target_dir / name
        shutil.copyfile(artifact.path, local)
        files.append(
            StagedFile(
                local=local,
                remote_path=f"{version_dir}/{name}",
                kind="artifact",
                checksums=write_checksums(local),
            )
        )

    pom_name = f"{c.artifact_id}-{c.version}.pom"
    pom = target_dir / pom_name
    pom.write_text(render_pom(bundle.metadata, c), encoding="utf-8")
    files.append(
        StagedFile(
            local=pom,
            remote_path=f"{version_dir}/{pom_name}",
            kind="pom",
            checksums=write_checksums(pom),
        )
    )

    return StagedDeployment(bundle=bundle, root=staging_dir, files=tuple(files))


def zip_deployment(deployment: StagedDeployment, zip_path: Path) -> Path:
    """Write every upload entry into a zip using repository-relative paths."""
    zip_path.parent.mkdir(parents=True, exist_ok=True)
    with ZipFile(zip_path, "w", compression=ZIP_DEFLATED, strict_timestamps=False) as zf:
        for local, remote_path in deployment.upload_entries():
            zf.write(local, arcname=remote_path)
    return zip_path
