from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from mpub.core.config import Coordinates
from mpub.core.result import Err, Ok, Result
from mpub.publish.errors import MissingPrimaryArtifact
from mpub.publish.metadata import ArtifactMetadata


@dataclass(frozen=True, slots=True)
class Artifact:
    path: Path
    classifier: str | None = None
    extension: str = "jar"

    def remote_name(self, coordinates: Coordinates) -> str:
        """Maven file name: artifactId-version[-classifier].ext"""
        base = f"{coordinates.artifact_id}-{coordinates.version}"
        if self.classifier:
            base += f"-{self.classifier}"
        return f"{base}.{self.extension}"


@dataclass(frozen=True, slots=True)
class ArtifactBundle:
    coordinates: Coordinates
    metadata: ArtifactMetadata
    primary: Artifact
    sources: Artifact | None = None
    docs: Artifact | None = None

    @property
    def artifacts(self) -> tuple[Artifact, ...]:
        """Artifacts in publishing order: primary, sources, docs."""
        return tuple(a for a in (self.primary, self.sources, self.docs) if a is not None)


def build(
    primary: Path | None,
    sources: Path | None = None,
    docs: Path | None = None,
    *,
    metadata: ArtifactMetadata,
    coordinates: Coordinates,
) -> Result[ArtifactBundle, MissingPrimaryArtifact]:
    """Collect the artifacts of one publication.

    `primary` must be an existing file. `sources` and `docs` are attached
    when given and omitted otherwise; a given path that is not a file fails
    the same way a missing primary does.
    """
    if primary is None:
        expected = f"{coordinates.artifact_id}.{coordinates.packaging}"
        return Err(MissingPrimaryArtifact(name=expected))
    if not primary.is_file():
        return Err(MissingPrimaryArtifact(name=str(primary)))
    for optional in (sources, docs):
        if optional is not None and not optional.is_file():
            return Err(MissingPrimaryArtifact(name=str(optional)))

    return Ok(
        ArtifactBundle(
            coordinates=coordinates,
            metadata=metadata,
            primary=Artifact(path=primary, extension=coordinates.packaging),
            sources=Artifact(path=sources, classifier="sources") if sources is not None else None,
            docs=Artifact(path=docs, classifier="javadoc") if docs is not None else None,
        )
    )
