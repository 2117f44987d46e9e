"""
Async HTTP client for the document, workflow and generation collaborators.

Every transport error, timeout or non-2xx answer is raised as
UpstreamUnavailable; callers never see raw httpx exceptions.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from spark2scale.client.errors import UpstreamUnavailable
from spark2scale.config import settings


class Spark2ScaleAPI:
    """Thin async client over the Spark2Scale REST contract."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._timeout = settings.request_timeout_seconds if timeout is None else timeout
        self._client: Optional[httpx.AsyncClient] = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True
        return self._client

    async def close(self):
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "Spark2ScaleAPI":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        client = await self._get_client()
        url = f"{self._base_url}{path}"
        try:
            resp = await client.request(method, url, timeout=self._timeout, **kwargs)
        except httpx.TimeoutException as e:
            raise UpstreamUnavailable(f"{method} {path} timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(f"{method} {path} failed: {e}") from e

        if resp.is_error:
            raise UpstreamUnavailable(
                f"{method} {path} returned {resp.status_code}: {resp.text[:200]}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamUnavailable(f"{method} {path} returned invalid JSON", resp.status_code) from e

    # ------------------------------------------------------------------
    # Document storage
    # ------------------------------------------------------------------

    async def list_documents(self, startup_id: str) -> list[dict]:
        return await self._request("GET", "/documents", params={"startupId": startup_id})

    async def get_history(self, document_id: str) -> list[dict]:
        return await self._request("GET", f"/documents/history/{document_id}")

    async def upload_document(
        self,
        startup_id: str,
        doc_name: str,
        doc_type: str,
        filename: str,
        content: bytes,
        document_id: str | None = None,
        content_type: str = "application/octet-stream",
    ) -> dict:
        """Upload a file as a new document, or as a new version of ``document_id``."""
        data = {"startupId": startup_id, "docName": doc_name, "type": doc_type}
        if document_id:
            data["documentId"] = document_id
        return await self._request(
            "POST",
            "/documents/upload",
            data=data,
            files={"file": (filename, content, content_type)},
        )

    # ------------------------------------------------------------------
    # Artifact generation
    # ------------------------------------------------------------------

    async def generate_mock(self, startup_id: str, doc_type: str) -> dict:
        return await self._request(
            "POST",
            "/documents/generate-mock",
            json={"startupId": startup_id, "type": doc_type},
        )

    # ------------------------------------------------------------------
    # Workflow storage
    # ------------------------------------------------------------------

    async def get_workflow(self, startup_id: str) -> dict:
        return await self._request("GET", f"/workflow/{startup_id}")

    async def update_workflow(self, record: dict) -> dict:
        return await self._request("POST", "/workflow/update", json=record)
