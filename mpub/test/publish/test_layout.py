"""Tests for mpub.publish.layout module."""

from __future__ import annotations

import hashlib
from pathlib import Path
from zipfile import ZipFile

import pytest

from mpub.core.config import Coordinates
from mpub.core.result import Ok
from mpub.publish.bundle import ArtifactBundle, build
from mpub.publish.layout import SigningState, stage, write_checksums, zip_deployment
from mpub.publish.metadata import ArtifactMetadata

_DIR = "com/protify/protify-ai/0.1.1"


@pytest.fixture
def bundle(
    jars: tuple[Path, Path, Path], metadata: ArtifactMetadata, coordinates: Coordinates
) -> ArtifactBundle:
    result = build(*jars, metadata=metadata, coordinates=coordinates)
    assert isinstance(result, Ok)
    return result.value


def test_write_checksums(tmp_path: Path) -> None:
    path = tmp_path / "lib.jar"
    path.write_bytes(b"hello")
    sidecars = write_checksums(path)
    assert [p.name for p in sidecars] == [
        "lib.jar.md5",
        "lib.jar.sha1",
        "lib.jar.sha256",
        "lib.jar.sha512",
    ]
    assert (tmp_path / "lib.jar.sha1").read_text() == hashlib.sha1(b"hello").hexdigest()
    assert (tmp_path / "lib.jar.md5").read_text() == hashlib.md5(b"hello").hexdigest()


def test_stage_layout(bundle: ArtifactBundle, tmp_path: Path) -> None:
    deployment = stage(bundle, tmp_path / "staging")

    assert deployment.state is SigningState.UNSIGNED
    assert deployment.version_dir == _DIR
    assert [f.remote_path for f in deployment.files] == [
        f"{_DIR}/protify-ai-0.1.1.jar",
        f"{_DIR}/protify-ai-0.1.1-sources.jar",
        f"{_DIR}/protify-ai-0.1.1-javadoc.jar",
        f"{_DIR}/protify-ai-0.1.1.pom",
    ]
    assert [f.kind for f in deployment.files] == ["artifact", "artifact", "artifact", "pom"]
    assert deployment.files[0].local.read_bytes() == b"PK\x03\x04classes"
    assert "<artifactId>protify-ai</artifactId>" in deployment.files[3].local.read_text()
    assert all(len(f.checksums) == 4 for f in deployment.files)


def test_stage_does_not_touch_sources(bundle: ArtifactBundle, tmp_path: Path) -> None:
    before = sorted(p.name for p in bundle.primary.path.parent.iterdir())
    stage(bundle, tmp_path / "staging")
    assert sorted(p.name for p in bundle.primary.path.parent.iterdir()) == before


def test_upload_entries_pom_last(bundle: ArtifactBundle, tmp_path: Path) -> None:
    deployment = stage(bundle, tmp_path / "staging")
    remotes = [remote for _, remote in deployment.upload_entries()]

    assert remotes[0] == f"{_DIR}/protify-ai-0.1.1.jar"
    assert remotes[1:5] == [
        f"{_DIR}/protify-ai-0.1.1.jar.md5",
        f"{_DIR}/protify-ai-0.1.1.jar.sha1",
        f"{_DIR}/protify-ai-0.1.1.jar.sha256",
        f"{_DIR}/protify-ai-0.1.1.jar.sha512",
    ]
    assert remotes[-1] == f"{_DIR}/protify-ai-0.1.1.pom"
    assert len(remotes) == 4 * 5


def test_signed_transition(bundle: ArtifactBundle, tmp_path: Path) -> None:
    deployment = stage(bundle, tmp_path / "staging")
    signatures = {}
    for f in deployment.files:
        sig = f.local.with_name(f"{f.local.name}.asc")
        sig.write_text("sig")
        signatures[f.remote_path] = sig

    signed = deployment.signed(signatures)
    assert signed.state is SigningState.SIGNED
    assert deployment.state is SigningState.UNSIGNED
    remotes = [remote for _, remote in signed.upload_entries()]
    assert f"{_DIR}/protify-ai-0.1.1.jar.asc" in remotes
    assert f"{_DIR}/protify-ai-0.1.1.pom.asc" in remotes
    assert remotes[-1] == f"{_DIR}/protify-ai-0.1.1.pom"

    with pytest.raises(ValueError, match="already signed"):
        signed.signed(signatures)


def test_signed_requires_every_file(bundle: ArtifactBundle, tmp_path: Path) -> None:
    deployment = stage(bundle, tmp_path / "staging")
    with pytest.raises(ValueError, match="missing signatures"):
        deployment.signed({})


def test_zip_deployment(bundle: ArtifactBundle, tmp_path: Path) -> None:
    deployment = stage(bundle, tmp_path / "staging")
    zip_path = zip_deployment(deployment, tmp_path / "out" / "bundle.zip")
    with ZipFile(zip_path) as zf:
        names = zf.namelist()
    assert names == [remote for _, remote in deployment.upload_entries()]
