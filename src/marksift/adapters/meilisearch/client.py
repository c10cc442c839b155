"""MeiliSearch client — Hosted full-text index for bookmarks.

MeiliSearch provides instant, typo-tolerant search out of the box.
This client communicates via the official REST API using ``httpx``.
Document writes are asynchronous on the MeiliSearch side; every mutation
waits for its task to finish so callers observe their own writes.

Usage::

    client = MeiliSearchIndexClient(
        base_url="http://localhost:7700",
        index="bookmarks",
        api_key="your-master-key",
    )
    await client.initialize()
    await client.add_documents(docs)
    response = await client.search(options)
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

import httpx

from marksift.adapters.base.client import SearchIndexClient
from marksift.adapters.base.exceptions import ConnectionError, QueryError
from marksift.adapters.base.filters import extract_owner
from marksift.models.document import BookmarkSearchDocument
from marksift.models.query import FilterConstraint, SearchOptions
from marksift.models.response import SearchHit, SearchResponse

logger = logging.getLogger(__name__)

_TASK_DONE = {"succeeded", "failed", "canceled"}


class MeiliSearchIndexClient(SearchIndexClient):
    """Search index client for MeiliSearch.

    Communicates with MeiliSearch via its `REST API`_ over HTTP.

    .. _REST API: https://www.meilisearch.com/docs/reference/api/overview

    Args:
        base_url: MeiliSearch instance URL, e.g. ``"http://localhost:7700"``.
        index: Index UID holding bookmark documents.
        api_key: Master key or API key for authentication.
        timeout: HTTP request timeout and task wait limit in seconds.
        poll_interval: Delay between task status checks in seconds.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:7700",
        index: str = "bookmarks",
        api_key: str | None = None,
        timeout: float = 30.0,
        poll_interval: float = 0.05,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._index = index
        self._api_key = api_key
        self._timeout = timeout
        self._poll_interval = poll_interval
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        return "meilisearch"

    async def initialize(self) -> None:
        """Create the HTTP client, verify MeiliSearch is up and prepare the index."""
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            headers=headers,
        )

        try:
            resp = await self._client.get("/health")
            resp.raise_for_status()
            data = resp.json()
            if data.get("status") != "available":
                raise ConnectionError(f"MeiliSearch not available: {data}")

            resp = await self._client.get(f"/indexes/{self._index}")
            if resp.status_code == 404:
                resp = await self._client.post("/indexes", json={"uid": self._index, "primaryKey": "id"})
                await self._wait_for_task(resp)
            else:
                resp.raise_for_status()

            resp = await self._client.patch(
                f"/indexes/{self._index}/settings",
                json={"filterableAttributes": ["userId"], "sortableAttributes": ["createdAt"]},
            )
            await self._wait_for_task(resp)
            logger.info(
                "Connected to MeiliSearch at %s (index: %s)",
                self._base_url,
                self._index,
            )
        except httpx.HTTPError as e:
            raise ConnectionError(f"Failed to connect to MeiliSearch: {e}") from e

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Index maintenance ────────────────────────────────────────────────

    async def add_documents(self, documents: Sequence[BookmarkSearchDocument]) -> None:
        if not documents:
            return
        payload = [doc.to_index_payload() for doc in documents]
        await self._write("POST", f"/indexes/{self._index}/documents", json=payload, params={"primaryKey": "id"})
        logger.info("Indexed %d documents in MeiliSearch", len(documents))

    async def update_documents(self, documents: Sequence[BookmarkSearchDocument]) -> None:
        if not documents:
            return
        payload = [doc.to_index_payload() for doc in documents]
        await self._write("PUT", f"/indexes/{self._index}/documents", json=payload, params={"primaryKey": "id"})
        logger.info("Updated %d documents in MeiliSearch", len(documents))

    async def delete_document(self, doc_id: str) -> None:
        await self._write("DELETE", f"/indexes/{self._index}/documents/{quote(doc_id, safe='')}")

    async def delete_documents(self, doc_ids: Sequence[str]) -> None:
        if not doc_ids:
            return
        await self._write("POST", f"/indexes/{self._index}/documents/delete-batch", json=list(doc_ids))
        logger.info("Deleted %d documents from MeiliSearch", len(doc_ids))

    async def clear_index(self) -> None:
        await self._write("DELETE", f"/indexes/{self._index}/documents")
        logger.info("Cleared MeiliSearch index %s", self._index)

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, options: SearchOptions) -> SearchResponse:
        """Execute an owner-scoped search against MeiliSearch.

        Uses the ``/indexes/{index}/search`` endpoint.
        """
        user_id = extract_owner(options.filter)
        if user_id is None:
            logger.warning("Refusing search without an owner constraint")
            return SearchResponse.empty()

        client = self._require_client()
        payload: dict[str, Any] = {
            "q": options.query,
            "filter": [FilterConstraint.owner(user_id).to_expression()],
            "limit": options.limit,
            "offset": options.offset,
            "attributesToRetrieve": ["id"],
            "showRankingScore": True,
        }

        try:
            start = time.monotonic()
            resp = await client.post(f"/indexes/{self._index}/search", json=payload)
            resp.raise_for_status()
            took_ms = int((time.monotonic() - start) * 1000)
        except httpx.HTTPError as e:
            raise QueryError(f"MeiliSearch query failed: {e}") from e

        data = resp.json()
        hits = [self._map_hit(hit) for hit in data.get("hits", [])]
        hits.sort(key=lambda hit: hit.score, reverse=True)
        total_hits = data.get("estimatedTotalHits", data.get("totalHits", len(hits)))
        return SearchResponse(
            hits=hits,
            total_hits=max(int(total_hits), options.offset + len(hits)),
            processing_time_ms=data.get("processingTimeMs", took_ms),
        )

    # ── Helpers ──────────────────────────────────────────────────────────

    def _require_client(self) -> httpx.AsyncClient:
        if not self._client:
            raise ConnectionError("MeiliSearch client not initialized.")
        return self._client

    @staticmethod
    def _map_hit(raw_hit: dict[str, Any]) -> SearchHit:
        score = float(raw_hit.get("_rankingScore", 0.0))
        return SearchHit(id=str(raw_hit["id"]), score=min(max(score, 0.0), 1.0))

    async def _write(self, method: str, url: str, **kwargs: Any) -> None:
        client = self._require_client()
        try:
            resp = await client.request(method, url, **kwargs)
            await self._wait_for_task(resp)
        except httpx.HTTPError as e:
            raise QueryError(f"MeiliSearch {method} {url} failed: {e}") from e

    async def _wait_for_task(self, resp: httpx.Response) -> None:
        """Block until the task enqueued by ``resp`` finishes.

        Raises:
            QueryError: If the task fails or does not finish within the timeout.
        """
        resp.raise_for_status()
        task_uid = resp.json().get("taskUid")
        if task_uid is None:
            return

        client = self._require_client()
        deadline = time.monotonic() + self._timeout
        while True:
            task_resp = await client.get(f"/tasks/{task_uid}")
            task_resp.raise_for_status()
            task = task_resp.json()
            status = task.get("status")
            if status in _TASK_DONE:
                if status != "succeeded":
                    raise QueryError(f"MeiliSearch task {task_uid} {status}: {task.get('error')}")
                return
            if time.monotonic() >= deadline:
                raise QueryError(f"MeiliSearch task {task_uid} did not finish within {self._timeout}s")
            await asyncio.sleep(self._poll_interval)
