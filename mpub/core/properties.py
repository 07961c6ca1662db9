"""Key/value property store backed by Java `.properties` files.

Credentials and the signing passphrase live here (or in the environment),
never in `mpub.toml`, which is usually committed.

Supported syntax: `key=value`, `key: value` and `key value`, `#`/`!`
comment lines, blank lines, and trailing-backslash line continuation.
Unicode escapes are not interpreted.
"""

from __future__ import annotations

from collections import ChainMap
from collections.abc import Iterable, Mapping
from pathlib import Path

from .config import ConfigError
from .result import Err, Ok, Result

__all__ = [
    "PROPERTIES_FILENAME",
    "PropertyStore",
    "load_properties",
    "load_property_store",
    "parse_properties",
    "user_properties_path",
]

PROPERTIES_FILENAME = "mpub.properties"

PropertyStore = Mapping[str, str]


def user_properties_path() -> Path:
    """Path to the per-user properties file (~/.mpub/mpub.properties)."""
    return Path.home() / ".mpub" / PROPERTIES_FILENAME


def _logical_lines(text: str) -> Iterable[str]:
    pending = ""
    for raw in text.splitlines():
        line = raw.lstrip() if pending else raw
        if not pending:
            stripped = line.lstrip()
            if not stripped or stripped[0] in "#!":
                continue
            line = stripped
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue
        yield pending + line
        pending = ""
    if pending:
        yield pending


def _split(line: str) -> tuple[str, str]:
    for i, ch in enumerate(line):
        if ch in "=:":
            return line[:i].rstrip(), line[i + 1 :].lstrip()
        if ch.isspace():
            rest = line[i:].lstrip()
            if rest[:1] in ("=", ":"):
                rest = rest[1:].lstrip()
            return line[:i], rest
    return line, ""


def parse_properties(text: str) -> dict[str, str]:
    """Parse properties text; later keys override earlier ones."""
    out: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split(line)
        if key:
            out[key] = value
    return out


def load_properties(path: Path) -> Result[dict[str, str], ConfigError]:
    try:
        return Ok(parse_properties(path.read_text(encoding="utf-8")))
    except FileNotFoundError:
        return Err(ConfigError(f"Properties file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading properties: {e}", path=path))


def load_property_store(
    *,
    optional: Iterable[Path] = (),
    required: Iterable[Path] = (),
) -> Result[PropertyStore, ConfigError]:
    """Layer properties files into one read-only store.

    Files are given lowest priority first. Missing `optional` files are
    skipped; missing `required` files are an error. Required files take
    precedence over optional ones.
    """
    layers: list[dict[str, str]] = []
    for path in optional:
        if not path.is_file():
            continue
        loaded = load_properties(path)
        if isinstance(loaded, Err):
            return loaded
        layers.append(loaded.value)
    for path in required:
        loaded = load_properties(path)
        if isinstance(loaded, Err):
            return loaded
        layers.append(loaded.value)

    # ChainMap looks up left to right, so the highest priority layer goes first.
    return Ok(ChainMap(*reversed(layers)))
