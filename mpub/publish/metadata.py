"""Project metadata: validation and POM rendering.

`assemble` only checks structure: every field the repository requires must be
present and non-empty. The POM produced by `render_pom` is the artifact's
permanent public description once published.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Mapping
from dataclasses import dataclass

from mpub.core.config import Coordinates
from mpub.core.result import Err, Ok, Result
from mpub.core.structured import StrDict, get_str, get_table, get_table_list
from mpub.publish.errors import MissingMetadataField

__all__ = [
    "ArtifactMetadata",
    "Dependency",
    "Developer",
    "License",
    "Scm",
    "assemble",
    "render_pom",
]

_POM_NS = "http://maven.apache.org/POM/4.0.0"
_XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
_POM_XSD = "https://maven.apache.org/xsd/maven-4.0.0.xsd"


@dataclass(frozen=True, slots=True)
class License:
    name: str
    url: str


@dataclass(frozen=True, slots=True)
class Developer:
    id: str
    name: str
    email: str


@dataclass(frozen=True, slots=True)
class Scm:
    connection: str
    developer_connection: str
    url: str


@dataclass(frozen=True, slots=True)
class Dependency:
    group: str
    artifact_id: str
    version: str
    scope: str | None = None


@dataclass(frozen=True, slots=True)
class ArtifactMetadata:
    name: str
    description: str
    license: License
    developers: tuple[Developer, ...]
    scm: Scm
    url: str | None = None
    dependencies: tuple[Dependency, ...] = ()


class _Missing(Exception):
    def __init__(self, field: str) -> None:
        super().__init__(field)
        self.field = field


def _require(table: Mapping[str, object], key: str, *, prefix: str = "") -> str:
    value = get_str(table, key)
    if value is None:
        raise _Missing(f"{prefix}{key}")
    return value


def _developers(config: Mapping[str, object]) -> tuple[Developer, ...]:
    tables = get_table_list(config, "developers")
    if not tables:
        raise _Missing("developers")
    out: list[Developer] = []
    for i, dev in enumerate(tables):
        prefix = f"developers[{i}]."
        out.append(
            Developer(
                id=_require(dev, "id", prefix=prefix),
                name=_require(dev, "name", prefix=prefix),
                email=_require(dev, "email", prefix=prefix),
            )
        )
    return tuple(out)


def _dependencies(config: Mapping[str, object]) -> tuple[Dependency, ...]:
    out: list[Dependency] = []
    for i, dep in enumerate(get_table_list(config, "dependencies") or []):
        prefix = f"dependencies[{i}]."
        out.append(
            Dependency(
                group=_require(dep, "group", prefix=prefix),
                artifact_id=_require(dep, "artifact_id", prefix=prefix),
                version=_require(dep, "version", prefix=prefix),
                scope=get_str(dep, "scope"),
            )
        )
    return tuple(out)


def assemble(config: Mapping[str, object]) -> Result[ArtifactMetadata, MissingMetadataField]:
    """Build validated metadata from the `[project]` table.

    Returns Err naming the first absent field, e.g. `license.url`,
    `developers[0].email` or `scm.developer_connection`.
    """
    try:
        name = _require(config, "name")
        description = _require(config, "description")
        license_table: StrDict = get_table(config, "license") or {}
        license = License(
            name=_require(license_table, "name", prefix="license."),
            url=_require(license_table, "url", prefix="license."),
        )
        developers = _developers(config)
        scm_table: StrDict = get_table(config, "scm") or {}
        scm = Scm(
            connection=_require(scm_table, "connection", prefix="scm."),
            developer_connection=_require(scm_table, "developer_connection", prefix="scm."),
            url=_require(scm_table, "url", prefix="scm."),
        )
        dependencies = _dependencies(config)
    except _Missing as e:
        return Err(MissingMetadataField(field=e.field))

    return Ok(
        ArtifactMetadata(
            name=name,
            description=description,
            license=license,
            developers=developers,
            scm=scm,
            url=get_str(config, "url"),
            dependencies=dependencies,
        )
    )


def _text(parent: ET.Element, tag: str, value: str) -> ET.Element:
    el = ET.SubElement(parent, tag)
    el.text = value
    return el


def render_pom(metadata: ArtifactMetadata, coordinates: Coordinates) -> str:
    """Render a Maven 4.0.0 POM document."""
    project = ET.Element(
        "project",
        {
            "xmlns": _POM_NS,
            "xmlns:xsi": _XSI_NS,
            "xsi:schemaLocation": f"{_POM_NS} {_POM_XSD}",
        },
    )
    _text(project, "modelVersion", "4.0.0")
    _text(project, "groupId", coordinates.group)
    _text(project, "artifactId", coordinates.artifact_id)
    _text(project, "version", coordinates.version)
    _text(project, "packaging", coordinates.packaging)
    _text(project, "name", metadata.name)
    _text(project, "description", metadata.description)
    if metadata.url:
        _text(project, "url", metadata.url)

    licenses = ET.SubElement(project, "licenses")
    lic = ET.SubElement(licenses, "license")
    _text(lic, "name", metadata.license.name)
    _text(lic, "url", metadata.license.url)

    developers = ET.SubElement(project, "developers")
    for dev in metadata.developers:
        d = ET.SubElement(developers, "developer")
        _text(d, "id", dev.id)
        _text(d, "name", dev.name)
        _text(d, "email", dev.email)

    scm = ET.SubElement(project, "scm")
    _text(scm, "connection", metadata.scm.connection)
    _text(scm, "developerConnection", metadata.scm.developer_connection)
    _text(scm, "url", metadata.scm.url)

    if metadata.dependencies:
        deps = ET.SubElement(project, "dependencies")
        for dep in metadata.dependencies:
            d = ET.SubElement(deps, "dependency")
            _text(d, "groupId", dep.group)
            _text(d, "artifactId", dep.artifact_id)
            _text(d, "version", dep.version)
            if dep.scope:
                _text(d, "scope", dep.scope)

    ET.indent(project, space="  ")
    body = ET.tostring(project, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'
