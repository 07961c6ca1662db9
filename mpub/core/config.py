"""Typed loading of `mpub.toml`.

The `[project]` table is kept as a raw mapping: its descriptive fields are
validated by the metadata assembler, which reports the exact missing field.
Coordinates, repositories, signing and timeouts are parsed here.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_float, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "Coordinates",
    "PublishingConfig",
    "PublishingType",
    "RepositoryConfig",
    "SigningConfig",
    "TimeoutsConfig",
    "load_config",
    "CONFIG_FILENAME",
    "DEFAULT_CREDENTIAL_NAME",
    "RELEASE_REPOSITORY_URL",
    "SNAPSHOT_REPOSITORY_URL",
    "SIGNING_TIMEOUT_SECONDS",
    "UPLOAD_TIMEOUT_SECONDS",
]

CONFIG_FILENAME = "mpub.toml"

# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------

# Central Portal endpoints
RELEASE_REPOSITORY_URL = "https://central.sonatype.com/api/v1/publisher/upload"
SNAPSHOT_REPOSITORY_URL = "https://central.sonatype.com/repository/maven-snapshots/"

DEFAULT_CREDENTIAL_NAME = "mavenCentral"

SIGNING_TIMEOUT_SECONDS = 60.0
UPLOAD_TIMEOUT_SECONDS = 5 * 60.0

PublishingType = Literal["USER_MANAGED", "AUTOMATIC"]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Coordinates:
    """Maven coordinates of the published artifact."""

    group: str
    artifact_id: str
    version: str
    packaging: str = "jar"

    @property
    def group_path(self) -> str:
        return self.group.replace(".", "/")

    @property
    def gav(self) -> str:
        return f"{self.group}:{self.artifact_id}:{self.version}"


@dataclass(frozen=True, slots=True)
class RepositoryConfig:
    release: str = RELEASE_REPOSITORY_URL
    snapshot: str = SNAPSHOT_REPOSITORY_URL


@dataclass(frozen=True, slots=True)
class PublishingConfig:
    credential: str = DEFAULT_CREDENTIAL_NAME
    publishing_type: PublishingType = "USER_MANAGED"


@dataclass(frozen=True, slots=True)
class SigningConfig:
    """Signing settings. The passphrase is never stored here."""

    enabled: bool = True
    key_id: str | None = None
    gpg: str = "gpg"


@dataclass(frozen=True, slots=True)
class TimeoutsConfig:
    upload: float = UPLOAD_TIMEOUT_SECONDS
    signing: float = SIGNING_TIMEOUT_SECONDS


def _empty_table() -> StrDict:
    return {}


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    group: str
    artifact_id: str
    packaging: str = "jar"
    project: StrDict = field(default_factory=_empty_table)
    repositories: RepositoryConfig = field(default_factory=RepositoryConfig)
    publishing: PublishingConfig = field(default_factory=PublishingConfig)
    signing: SigningConfig = field(default_factory=SigningConfig)
    timeouts: TimeoutsConfig = field(default_factory=TimeoutsConfig)

    def coordinates(self, version: str) -> Coordinates:
        return Coordinates(
            group=self.group,
            artifact_id=self.artifact_id,
            version=version,
            packaging=self.packaging,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: if `[project]` lacks `group` or `artifact_id`, or a
                value has the wrong shape.
        """
        project: StrDict = get_table(data, "project") or {}
        repositories: StrDict = get_table(data, "repositories") or {}
        publishing: StrDict = get_table(data, "publishing") or {}
        signing: StrDict = get_table(data, "signing") or {}
        timeouts: StrDict = get_table(data, "timeouts") or {}

        group = get_str(project, "group")
        if group is None:
            raise ValueError("[project] group is required")
        artifact_id = get_str(project, "artifact_id")
        if artifact_id is None:
            raise ValueError("[project] artifact_id is required")

        publishing_type = get_str(publishing, "publishing_type") or "USER_MANAGED"
        if publishing_type not in ("USER_MANAGED", "AUTOMATIC"):
            raise ValueError(
                f"[publishing] publishing_type must be USER_MANAGED or AUTOMATIC, "
                f"got {publishing_type!r}"
            )

        upload_timeout = get_float(timeouts, "upload")
        if upload_timeout is None:
            upload_timeout = UPLOAD_TIMEOUT_SECONDS
        signing_timeout = get_float(timeouts, "signing")
        if signing_timeout is None:
            signing_timeout = SIGNING_TIMEOUT_SECONDS
        if upload_timeout <= 0 or signing_timeout <= 0:
            raise ValueError("[timeouts] values must be positive")

        enabled = get_bool(signing, "enabled")

        return cls(
            group=group,
            artifact_id=artifact_id,
            packaging=get_str(project, "packaging") or "jar",
            project=project,
            repositories=RepositoryConfig(
                release=get_str(repositories, "release") or RELEASE_REPOSITORY_URL,
                snapshot=get_str(repositories, "snapshot") or SNAPSHOT_REPOSITORY_URL,
            ),
            publishing=PublishingConfig(
                credential=get_str(publishing, "credential") or DEFAULT_CREDENTIAL_NAME,
                publishing_type="AUTOMATIC" if publishing_type == "AUTOMATIC" else "USER_MANAGED",
            ),
            signing=SigningConfig(
                enabled=True if enabled is None else enabled,
                key_id=get_str(signing, "key_id"),
                gpg=get_str(signing, "gpg") or "gpg",
            ),
            timeouts=TimeoutsConfig(upload=upload_timeout, signing=signing_timeout),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse `mpub.toml`.

    Args:
        path: Path to the config file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config: {e}", path=path))
