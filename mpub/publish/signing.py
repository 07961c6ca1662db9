"""Signing capability.

Signing is opaque to the pipeline: a `Signer` turns a file into a detached
signature file. Production uses the `gpg` executable; tests use MockSigner.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from mpub.core.config import SIGNING_TIMEOUT_SECONDS
from mpub.core.result import Err, Ok, Result
from mpub.platform.process import run as run_process
from mpub.publish.errors import SigningFailed, Timeout

__all__ = ["GpgSigner", "MockSigner", "Signer", "SignError"]

SignError = SigningFailed | Timeout


@runtime_checkable
class Signer(Protocol):
    def sign(self, path: Path) -> Result[Path, SignError]:
        """Write a detached signature for `path` and return its location."""
        ...


class GpgSigner:
    """Detached ASCII-armored signatures via `gpg`.

    The passphrase, when given, is fed on stdin with loopback pinentry so it
    never appears on the command line.
    """

    def __init__(
        self,
        *,
        gpg: str = "gpg",
        key_id: str | None = None,
        passphrase: str | None = None,
        timeout: float = SIGNING_TIMEOUT_SECONDS,
    ) -> None:
        self.gpg = gpg
        self.key_id = key_id
        self._passphrase = passphrase
        self.timeout = timeout

    def command(self, path: Path, out: Path) -> list[str]:
        cmd = [self.gpg, "--batch", "--yes", "--armor", "--detach-sign", "--output", str(out)]
        if self.key_id:
            cmd += ["--local-user", self.key_id]
        if self._passphrase is not None:
            cmd += ["--pinentry-mode", "loopback", "--passphrase-fd", "0"]
        cmd.append(str(path))
        return cmd

    def sign(self, path: Path) -> Result[Path, SignError]:
        if shutil.which(self.gpg) is None:
            return Err(SigningFailed(artifact=path.name, reason=f"{self.gpg}: not found"))

        out = path.with_name(f"{path.name}.asc")
        result = run_process(
            self.command(path, out),
            cwd=path.parent,
            timeout=self.timeout,
            input_text=self._passphrase,
        )
        if isinstance(result, Err):
            error = result.error
            if error.timed_out:
                return Err(Timeout(operation=f"signing {path.name}", seconds=self.timeout))
            reason = error.stderr.strip() or str(error)
            return Err(SigningFailed(artifact=path.name, reason=reason))

        if not out.is_file():
            return Err(SigningFailed(artifact=path.name, reason="gpg produced no signature"))
        return Ok(out)


def _empty_paths() -> list[Path]:
    return []


@dataclass
class MockSigner:
    """Signer for tests: writes a fake signature, optionally rejecting files.

    Usage:
        signer = MockSigner(reject={"lib-1.0-sources.jar"})
    """

    reject: set[str] = field(default_factory=set)
    reject_all: bool = False
    timeout: bool = False
    signed: list[Path] = field(default_factory=_empty_paths)

    def sign(self, path: Path) -> Result[Path, SignError]:
        if self.timeout:
            return Err(Timeout(operation=f"signing {path.name}", seconds=0.0))
        if self.reject_all or path.name in self.reject:
            return Err(SigningFailed(artifact=path.name, reason="rejected (mock)"))
        out = path.with_name(f"{path.name}.asc")
        out.write_text(f"-----BEGIN PGP SIGNATURE-----\nmock:{path.name}\n", encoding="ascii")
        self.signed.append(path)
        return Ok(out)
