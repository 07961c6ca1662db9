"""Failure kinds of the publishing pipeline.

Local validation failures (metadata, primary artifact, credential) happen
before any network traffic. `Timeout` is kept apart from `SigningFailed` and
`UploadFailed` so callers can tell "never completed" from "rejected".
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MissingMetadataField:
    field: str


@dataclass(frozen=True, slots=True)
class MissingPrimaryArtifact:
    name: str


@dataclass(frozen=True, slots=True)
class MissingCredential:
    name: str


@dataclass(frozen=True, slots=True)
class SigningFailed:
    artifact: str
    reason: str


@dataclass(frozen=True, slots=True)
class UploadFailed:
    url: str
    cause: str
    status: int = 0  # 0 for transport errors

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.cause} ({self.url})"
        return f"{self.cause} ({self.url})"


@dataclass(frozen=True, slots=True)
class Timeout:
    operation: str
    seconds: float


PublishError = (
    MissingMetadataField
    | MissingPrimaryArtifact
    | MissingCredential
    | SigningFailed
    | UploadFailed
    | Timeout
)
