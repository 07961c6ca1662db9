"""Layered credential lookup.

A credential name such as `mavenCentral` expands to the keys
`mavenCentralUsername` and `mavenCentralPassword`. Each key is read from the
property store first and from the environment second, where the variable
name is the key in upper snake case (`MAVEN_CENTRAL_USERNAME`).

Absence is not an error here: the publisher decides whether a credential is
actually needed.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

__all__ = [
    "Credential",
    "env_var_name",
    "password_key",
    "resolve",
    "resolve_value",
    "username_key",
]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


@dataclass(frozen=True, slots=True)
class Credential:
    username: str
    secret: str = field(repr=False)


def username_key(name: str) -> str:
    return f"{name}Username"


def password_key(name: str) -> str:
    return f"{name}Password"


def env_var_name(key: str) -> str:
    """`mavenCentralUsername` -> `MAVEN_CENTRAL_USERNAME`."""
    snake = _CAMEL_BOUNDARY.sub("_", key)
    return re.sub(r"[^A-Za-z0-9]+", "_", snake).upper()


def resolve_value(
    key: str,
    *,
    properties: Mapping[str, str],
    environ: Mapping[str, str],
) -> str | None:
    """Look a key up in the property store, then in the environment.

    Blank values count as unset.
    """
    value = properties.get(key)
    if value is not None and value.strip():
        return value.strip()
    value = environ.get(env_var_name(key))
    if value is not None and value.strip():
        return value.strip()
    return None


def resolve(
    name: str,
    *,
    properties: Mapping[str, str],
    environ: Mapping[str, str],
) -> Credential | None:
    """Resolve a named credential, or None if either half is missing."""
    username = resolve_value(username_key(name), properties=properties, environ=environ)
    secret = resolve_value(password_key(name), properties=properties, environ=environ)
    if username is None or secret is None:
        return None
    return Credential(username=username, secret=secret)
