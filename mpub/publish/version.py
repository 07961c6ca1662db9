from __future__ import annotations

from dataclasses import dataclass

SNAPSHOT_SUFFIX = "-SNAPSHOT"


def is_snapshot(version: str) -> bool:
    """True if `version` is a pre-release (snapshot) version.

    The suffix must terminate the string and cannot be the whole string:
    "-SNAPSHOT" and "1.0-SNAPSHOT.1" are release versions.
    """
    return len(version) > len(SNAPSHOT_SUFFIX) and version.endswith(SNAPSHOT_SUFFIX)


@dataclass(frozen=True, slots=True)
class ArtifactVersion:
    value: str

    def __post_init__(self) -> None:
        if not self.value or self.value != self.value.strip():
            raise ValueError(f"invalid version: {self.value!r}")

    @property
    def is_snapshot(self) -> bool:
        return is_snapshot(self.value)

    def __str__(self) -> str:
        return self.value
