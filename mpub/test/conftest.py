from __future__ import annotations

from pathlib import Path

import pytest

from mpub.core.config import Coordinates
from mpub.core.structured import StrDict
from mpub.core.result import Ok
from mpub.publish.metadata import ArtifactMetadata, assemble


def project_table() -> StrDict:
    return {
        "group": "com.protify",
        "artifact_id": "protify-ai",
        "name": "Protify AI",
        "description": "Provider-agnostic AI client for the JVM",
        "url": "https://github.com/protify/protify-ai",
        "license": {
            "name": "The Apache License, Version 2.0",
            "url": "https://www.apache.org/licenses/LICENSE-2.0.txt",
        },
        "developers": [
            {"id": "protify", "name": "Protify Consulting", "email": "dev@protify.ai"},
        ],
        "scm": {
            "connection": "scm:git:git://github.com/protify/protify-ai.git",
            "developer_connection": "scm:git:ssh://github.com/protify/protify-ai.git",
            "url": "https://github.com/protify/protify-ai",
        },
    }


MPUB_TOML = """\
[project]
group = "com.protify"
artifact_id = "protify-ai"
name = "Protify AI"
description = "Provider-agnostic AI client for the JVM"
url = "https://github.com/protify/protify-ai"

[project.license]
name = "The Apache License, Version 2.0"
url = "https://www.apache.org/licenses/LICENSE-2.0.txt"

[[project.developers]]
id = "protify"
name = "Protify Consulting"
email = "dev@protify.ai"

[project.scm]
connection = "scm:git:git://github.com/protify/protify-ai.git"
developer_connection = "scm:git:ssh://github.com/protify/protify-ai.git"
url = "https://github.com/protify/protify-ai"
"""


@pytest.fixture
def project() -> StrDict:
    return project_table()


@pytest.fixture
def metadata() -> ArtifactMetadata:
    result = assemble(project_table())
    assert isinstance(result, Ok)
    return result.value


@pytest.fixture
def coordinates() -> Coordinates:
    return Coordinates(group="com.protify", artifact_id="protify-ai", version="0.1.1")


@pytest.fixture
def jars(tmp_path: Path) -> tuple[Path, Path, Path]:
    build = tmp_path / "build" / "libs"
    build.mkdir(parents=True)
    primary = build / "protify-ai.jar"
    sources = build / "protify-ai-sources.jar"
    docs = build / "protify-ai-javadoc.jar"
    primary.write_bytes(b"PK\x03\x04classes")
    sources.write_bytes(b"PK\x03\x04sources")
    docs.write_bytes(b"PK\x03\x04javadoc")
    return primary, sources, docs


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    (root / "mpub.toml").write_text(MPUB_TOML, encoding="utf-8")
    return root
