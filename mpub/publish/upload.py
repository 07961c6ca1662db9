"""Upload capability.

This module provides:
- Uploader: Protocol for sending a staged deployment (injectable for tests)
- HttpUploader: Real implementation using urllib
- MockUploader: Records calls for testing

Release targets receive the whole deployment as one zip POSTed to the
Central Portal publisher API; the portal deployment is all-or-nothing.
Snapshot targets receive one PUT per file with the POM last; on failure or
interrupt the files already sent are deleted again.
"""

from __future__ import annotations

import base64
import http.client
import ssl
import urllib.error
import urllib.parse
import urllib.request
import uuid
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from mpub import __version__
from mpub.core.config import UPLOAD_TIMEOUT_SECONDS, PublishingType
from mpub.core.result import Err, Ok, Result
from mpub.publish.credentials import Credential
from mpub.publish.errors import Timeout, UploadFailed
from mpub.publish.layout import StagedDeployment, zip_deployment
from mpub.publish.routing import RepositoryTarget

__all__ = [
    "HttpUploader",
    "MockUploader",
    "UploadError",
    "UploadReceipt",
    "Uploader",
]

UploadError = UploadFailed | Timeout


@dataclass(frozen=True, slots=True)
class UploadReceipt:
    url: str
    uploaded_files: int
    deployment_id: str | None = None


@runtime_checkable
class Uploader(Protocol):
    def upload(
        self,
        deployment: StagedDeployment,
        target: RepositoryTarget,
        credential: Credential | None,
    ) -> Result[UploadReceipt, UploadError]:
        """Send every file of `deployment` to `target`."""
        ...


def _basic_auth(credential: Credential) -> str:
    token = base64.b64encode(f"{credential.username}:{credential.secret}".encode()).decode()
    return f"Basic {token}"


def _bearer_auth(credential: Credential) -> str:
    token = base64.b64encode(f"{credential.username}:{credential.secret}".encode()).decode()
    return f"Bearer {token}"


def _multipart(field_name: str, filename: str, payload: bytes) -> tuple[bytes, str]:
    boundary = uuid.uuid4().hex
    head = (
        f"--{boundary}\r\n"
        f'Content-Disposition: form-data; name="{field_name}"; filename="{filename}"\r\n'
        "Content-Type: application/octet-stream\r\n\r\n"
    ).encode()
    tail = f"\r\n--{boundary}--\r\n".encode()
    return head + payload + tail, f"multipart/form-data; boundary={boundary}"


class HttpUploader:
    """Uploader over HTTPS using urllib.

    Handles:
    - Central Portal bundle upload (release)
    - Maven repository PUT with rollback (snapshot)
    - Timeout handling, reported as Timeout rather than UploadFailed
    """

    def __init__(
        self,
        *,
        timeout: float = UPLOAD_TIMEOUT_SECONDS,
        publishing_type: PublishingType = "USER_MANAGED",
        user_agent: str = f"mpub/{__version__}",
    ) -> None:
        self.timeout = timeout
        self.publishing_type = publishing_type
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _send(
        self,
        method: str,
        url: str,
        *,
        data: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> Result[bytes, UploadError]:
        req = urllib.request.Request(
            url,
            data=data,
            method=method,
            headers={"User-Agent": self.user_agent, **(headers or {})},
        )
        try:
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", errors="replace").strip()
            return Err(UploadFailed(url=url, cause=body or str(e.reason), status=e.code))
        except urllib.error.URLError as e:
            if isinstance(e.reason, TimeoutError):
                return Err(Timeout(operation=f"{method} {url}", seconds=self.timeout))
            return Err(UploadFailed(url=url, cause=str(e.reason)))
        except TimeoutError:
            return Err(Timeout(operation=f"{method} {url}", seconds=self.timeout))
        except http.client.HTTPException as e:
            return Err(UploadFailed(url=url, cause=f"{type(e).__name__}: {e}"))
        except (ValueError, OSError) as e:
            return Err(UploadFailed(url=url, cause=str(e)))

    def upload(
        self,
        deployment: StagedDeployment,
        target: RepositoryTarget,
        credential: Credential | None,
    ) -> Result[UploadReceipt, UploadError]:
        if target.kind == "release":
            return self._upload_bundle(deployment, target, credential)
        return self._upload_files(deployment, target, credential)

    def _upload_bundle(
        self,
        deployment: StagedDeployment,
        target: RepositoryTarget,
        credential: Credential | None,
    ) -> Result[UploadReceipt, UploadError]:
        c = deployment.bundle.coordinates
        entries = deployment.upload_entries()
        try:
            zip_path = zip_deployment(
                deployment, deployment.root / f"{c.artifact_id}-{c.version}-bundle.zip"
            )
            payload = zip_path.read_bytes()
        except OSError as e:
            return Err(UploadFailed(url=target.url, cause=f"cannot write bundle: {e}"))

        body, content_type = _multipart("bundle", zip_path.name, payload)
        query = urllib.parse.urlencode({"name": c.gav, "publishingType": self.publishing_type})
        url = f"{target.url}?{query}"
        headers = {"Content-Type": content_type}
        if credential is not None:
            headers["Authorization"] = _bearer_auth(credential)

        result = self._send("POST", url, data=body, headers=headers)
        if isinstance(result, Err):
            return result

        deployment_id = result.value.decode("utf-8", errors="replace").strip() or None
        return Ok(
            UploadReceipt(url=target.url, uploaded_files=len(entries), deployment_id=deployment_id)
        )

    def _upload_files(
        self,
        deployment: StagedDeployment,
        target: RepositoryTarget,
        credential: Credential | None,
    ) -> Result[UploadReceipt, UploadError]:
        base = target.url.rstrip("/")
        headers = {"Content-Type": "application/octet-stream"}
        if credential is not None:
            headers["Authorization"] = _basic_auth(credential)

        sent: list[str] = []
        try:
            for local, remote_path in deployment.upload_entries():
                url = f"{base}/{remote_path}"
                try:
                    data = local.read_bytes()
                except OSError as e:
                    failed = UploadFailed(url=url, cause=str(e))
                    return Err(self._with_rollback(failed, sent, headers))
                result = self._send("PUT", url, data=data, headers=headers)
                if isinstance(result, Err):
                    return Err(self._with_rollback(result.error, sent, headers))
                sent.append(url)
        except BaseException:
            self._rollback(sent, headers)
            raise

        return Ok(UploadReceipt(url=target.url, uploaded_files=len(sent)))

    def _rollback(self, sent: list[str], headers: dict[str, str]) -> list[str]:
        """Delete already uploaded files, newest first. Returns the leftovers."""
        auth = {k: v for k, v in headers.items() if k == "Authorization"}
        left: list[str] = []
        for url in reversed(sent):
            if isinstance(self._send("DELETE", url, headers=auth), Err):
                left.append(url)
        return left

    def _with_rollback(
        self,
        error: UploadError,
        sent: list[str],
        headers: dict[str, str],
    ) -> UploadError:
        left = self._rollback(sent, headers)
        if not left or not isinstance(error, UploadFailed):
            return error
        return UploadFailed(
            url=error.url,
            cause=f"{error.cause} (rollback incomplete: {len(left)} file(s) left)",
            status=error.status,
        )


def _empty_calls() -> list[tuple[str, str]]:
    return []


@dataclass
class MockUploader:
    """Uploader for tests.

    Usage:
        uploader = MockUploader(error=UploadFailed(url="...", cause="boom"))
        uploader.calls  # [(target url, gav), ...]
    """

    error: UploadError | None = None
    deployment_id: str | None = None
    calls: list[tuple[str, str]] = field(default_factory=_empty_calls)
    credentials: list[Credential | None] = field(default_factory=list)
    entries: list[list[tuple[str, str]]] = field(default_factory=list)

    def upload(
        self,
        deployment: StagedDeployment,
        target: RepositoryTarget,
        credential: Credential | None,
    ) -> Result[UploadReceipt, UploadError]:
        self.calls.append((target.url, deployment.bundle.coordinates.gav))
        self.credentials.append(credential)
        upload_entries = deployment.upload_entries()
        self.entries.append([(local.name, remote) for local, remote in upload_entries])
        if self.error is not None:
            return Err(self.error)
        return Ok(
            UploadReceipt(
                url=target.url,
                uploaded_files=len(upload_entries),
                deployment_id=self.deployment_id,
            )
        )
