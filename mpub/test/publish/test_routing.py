"""Tests for version classification and repository routing."""

from __future__ import annotations

import pytest

from mpub.core.config import RELEASE_REPOSITORY_URL, SNAPSHOT_REPOSITORY_URL, RepositoryConfig
from mpub.publish.routing import RepositoryTarget, route
from mpub.publish.version import ArtifactVersion, is_snapshot


class TestIsSnapshot:
    @pytest.mark.parametrize(
        "version",
        ["0.1.1-SNAPSHOT", "1.0-SNAPSHOT", "2.0.0-rc1-SNAPSHOT", "x-SNAPSHOT"],
    )
    def test_snapshot_versions(self, version: str) -> None:
        assert is_snapshot(version)

    @pytest.mark.parametrize(
        "version",
        [
            "0.1.1",
            "-SNAPSHOT",  # suffix alone
            "1.0-SNAPSHOT.1",  # contains but does not end with the suffix
            "1.0-SNAPSHOT-rc",
            "1.0-snapshot",  # case sensitive
            "1.0SNAPSHOT",
            "1.0-SNAPSHOT ",
        ],
    )
    def test_release_versions(self, version: str) -> None:
        assert not is_snapshot(version)


class TestArtifactVersion:
    def test_property(self) -> None:
        assert ArtifactVersion("0.1.1-SNAPSHOT").is_snapshot
        assert not ArtifactVersion("0.1.1").is_snapshot
        assert str(ArtifactVersion("0.1.1")) == "0.1.1"

    @pytest.mark.parametrize("value", ["", "   ", " 1.0", "1.0\n"])
    def test_rejects_blank_or_padded(self, value: str) -> None:
        with pytest.raises(ValueError, match="invalid version"):
            ArtifactVersion(value)

    def test_frozen(self) -> None:
        version = ArtifactVersion("1.0")
        with pytest.raises(AttributeError):
            version.value = "2.0"  # type: ignore[misc]


class TestRoute:
    def test_snapshot_goes_to_snapshot_repository(self) -> None:
        target = route(ArtifactVersion("0.1.1-SNAPSHOT"))
        assert target == RepositoryTarget(url=SNAPSHOT_REPOSITORY_URL, kind="snapshot")
        assert target.requires_auth

    def test_release_goes_to_release_repository(self) -> None:
        target = route(ArtifactVersion("0.1.1"))
        assert target == RepositoryTarget(url=RELEASE_REPOSITORY_URL, kind="release")
        assert target.requires_auth

    @pytest.mark.parametrize("version", ["-SNAPSHOT", "1.0-SNAPSHOT.1"])
    def test_boundaries_route_to_release(self, version: str) -> None:
        assert route(ArtifactVersion(version)).kind == "release"

    def test_configured_urls(self) -> None:
        repos = RepositoryConfig(release="https://r.example/upload", snapshot="https://s.example/")
        assert route(ArtifactVersion("1.0"), repos).url == "https://r.example/upload"
        assert route(ArtifactVersion("1.0-SNAPSHOT"), repos).url == "https://s.example/"

    def test_deterministic(self) -> None:
        version = ArtifactVersion("3.2.1")
        assert route(version) == route(version)
