"""Artifact publishing pipeline."""

from .bundle import Artifact, ArtifactBundle, build
from .credentials import Credential, resolve
from .errors import (
    MissingCredential,
    MissingMetadataField,
    MissingPrimaryArtifact,
    PublishError,
    SigningFailed,
    Timeout,
    UploadFailed,
)
from .layout import SigningState
from .metadata import ArtifactMetadata, assemble, render_pom
from .routing import RepositoryTarget, route
from .service import PublishResult, publish
from .version import ArtifactVersion, is_snapshot

__all__ = [
    "Artifact",
    "ArtifactBundle",
    "ArtifactMetadata",
    "ArtifactVersion",
    "Credential",
    "MissingCredential",
    "MissingMetadataField",
    "MissingPrimaryArtifact",
    "PublishError",
    "PublishResult",
    "RepositoryTarget",
    "SigningFailed",
    "SigningState",
    "Timeout",
    "UploadFailed",
    "assemble",
    "build",
    "is_snapshot",
    "publish",
    "render_pom",
    "resolve",
    "route",
]
