"""Repository selection.

The only branching business rule of the pipeline: snapshot versions go to
the snapshot repository, everything else to the release (staging) endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from mpub.core.config import RepositoryConfig
from mpub.publish.version import ArtifactVersion

RepositoryKind = Literal["snapshot", "release"]


@dataclass(frozen=True, slots=True)
class RepositoryTarget:
    url: str
    kind: RepositoryKind
    requires_auth: bool = True


def route(
    version: ArtifactVersion,
    repositories: RepositoryConfig | None = None,
) -> RepositoryTarget:
    repos = repositories or RepositoryConfig()
    if version.is_snapshot:
        return RepositoryTarget(url=repos.snapshot, kind="snapshot")
    return RepositoryTarget(url=repos.release, kind="release")
