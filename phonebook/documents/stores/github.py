"""GitHub contents API implementation of DocumentStore.

Each document is a JSON file at ``<data_dir>/<name>.json`` in a repository.
The file's blob SHA is the version token: reads return it and writes must
send it back, which makes every PUT a conditional write.
"""

import base64
import time
from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

import httpx

from phonebook.config.credentials import GitHubCredentials
from phonebook.config.models.store import StoreConfig
from phonebook.documents.exceptions import ConflictError, StoreError
from phonebook.documents.models import DocumentSnapshot
from phonebook.documents.store import DocumentStore, decode_items, encode_items
from phonebook.observability.logging import get_logger
from phonebook.observability.metrics import STORE_ERRORS, STORE_REQUEST_LATENCY

logger = get_logger(__name__)


class GitHubDocumentStore(DocumentStore):
    """Document store backed by a repository's contents API."""

    def __init__(
        self,
        config: StoreConfig,
        credentials: GitHubCredentials,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the store.

        Args:
            config: Store settings (API URL, data directory, committer)
            credentials: Complete credentials; call ``require()`` first
            client: HTTP client to use; one is created if omitted
        """
        credentials.require()
        self._config = config
        self._owner = credentials.owner
        self._repo = credentials.repo
        self._token = credentials.token.get_secret_value()  # type: ignore[union-attr]
        self._client = client or httpx.AsyncClient(timeout=config.timeout_seconds)

    def path_for(self, name: str) -> str:
        """Repository path of a document."""
        return f"{self._config.data_dir}/{name}.json" if self._config.data_dir else f"{name}.json"

    def _url(self, name: str) -> str:
        path = quote(self.path_for(name), safe="/")
        return f"{self._config.api_url}/repos/{self._owner}/{self._repo}/contents/{path}"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": self._config.user_agent,
        }

    async def _send(self, operation: str, request: httpx.Request) -> httpx.Response:
        """Send a request, mapping transport failures to StoreError."""
        start = time.perf_counter()
        try:
            return await self._client.send(request)
        except httpx.TimeoutException as e:
            STORE_ERRORS.labels(operation=operation).inc()
            logger.warning("store_timeout", operation=operation, url=str(request.url))
            raise StoreError(f"Store {operation} timed out") from e
        except httpx.HTTPError as e:
            STORE_ERRORS.labels(operation=operation).inc()
            logger.error("store_http_error", operation=operation, error=str(e))
            raise StoreError(f"Store {operation} failed: {e}") from e
        finally:
            STORE_REQUEST_LATENCY.labels(operation=operation).observe(time.perf_counter() - start)

    @staticmethod
    def _json(response: httpx.Response, operation: str) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            STORE_ERRORS.labels(operation=operation).inc()
            raise StoreError(
                f"Store {operation} returned malformed JSON",
                status_code=response.status_code,
            ) from e
        if not isinstance(data, dict):
            STORE_ERRORS.labels(operation=operation).inc()
            raise StoreError(
                f"Store {operation} returned an unexpected payload",
                status_code=response.status_code,
            )
        return data

    def _unexpected(self, response: httpx.Response, operation: str, name: str) -> StoreError:
        STORE_ERRORS.labels(operation=operation).inc()
        logger.error(
            "store_unexpected_status",
            operation=operation,
            document=name,
            status_code=response.status_code,
            response_preview=response.text[:200],
        )
        return StoreError(
            f"Store {operation} failed with status {response.status_code}",
            status_code=response.status_code,
        )

    async def read(self, name: str) -> DocumentSnapshot:
        """Read a document and its blob SHA; 404 yields an empty document."""
        params = {"ref": self._config.branch} if self._config.branch else None
        request = self._client.build_request(
            "GET", self._url(name), headers=self._headers(), params=params
        )
        response = await self._send("read", request)

        if response.status_code == 404:
            logger.debug("document_not_found", document=name, path=self.path_for(name))
            return DocumentSnapshot(name=name)

        if response.status_code != 200:
            raise self._unexpected(response, "read", name)

        data = self._json(response, "read")
        sha = data.get("sha")
        encoded = data.get("content")
        if not isinstance(sha, str) or not isinstance(encoded, str):
            STORE_ERRORS.labels(operation="read").inc()
            raise StoreError("Store read response is missing content or sha", status_code=200)

        if data.get("encoding", "base64") != "base64":
            STORE_ERRORS.labels(operation="read").inc()
            raise StoreError(
                f"Document '{name}' is too large to read inline",
                status_code=200,
            )

        try:
            content = base64.b64decode(encoded).decode("utf-8")
        except ValueError as e:
            # binascii.Error, UnicodeDecodeError and non-ASCII input are all ValueError
            STORE_ERRORS.labels(operation="read").inc()
            raise StoreError("Store read returned undecodable content", status_code=200) from e

        items = decode_items(name, content)
        logger.debug("document_read", document=name, count=len(items), version=sha)
        return DocumentSnapshot(name=name, items=items, version=sha)

    async def write(
        self,
        name: str,
        items: Sequence[str],
        expected_version: str | None,
        *,
        message: str,
    ) -> str:
        """PUT the full contents conditioned on the expected blob SHA."""
        encoded = base64.b64encode(encode_items(items).encode("utf-8")).decode("ascii")
        body: dict[str, Any] = {
            "message": message,
            "content": encoded,
            "committer": {
                "name": self._config.committer_name,
                "email": self._config.committer_email,
            },
        }
        if expected_version is not None:
            body["sha"] = expected_version
        if self._config.branch:
            body["branch"] = self._config.branch

        request = self._client.build_request(
            "PUT", self._url(name), headers=self._headers(), json=body
        )
        response = await self._send("write", request)

        # 409: sha mismatch. 422 on create: the file appeared and no sha was sent.
        if response.status_code == 409 or (
            response.status_code == 422 and expected_version is None
        ):
            logger.info(
                "document_write_conflict",
                document=name,
                expected_version=expected_version,
                status_code=response.status_code,
            )
            raise ConflictError(name, expected_version)

        if response.status_code not in (200, 201):
            raise self._unexpected(response, "write", name)

        data = self._json(response, "write")
        content = data.get("content")
        version = content.get("sha") if isinstance(content, dict) else None
        if not isinstance(version, str):
            STORE_ERRORS.labels(operation="write").inc()
            raise StoreError(
                "Store write response is missing the new sha",
                status_code=response.status_code,
            )

        logger.debug("document_written", document=name, count=len(items), version=version)
        return version

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
