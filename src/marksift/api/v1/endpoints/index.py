"""Index endpoints — Keep the active backend's index in step with the store."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from marksift.adapters.base.exceptions import AdapterError, ConnectionError, StoreUnavailableError
from marksift.adapters.base.registry import NoSearchBackendError
from marksift.api.deps import get_engine
from marksift.core.engine import SearchEngine
from marksift.models.query import IndexRequest

logger = logging.getLogger(__name__)

router = APIRouter()


class IndexResponse(BaseModel):
    """Outcome of an index maintenance call."""

    indexed: int = Field(default=0, description="Documents sent to the backend")
    deleted: int = Field(default=0, description="Documents removed from the backend")


def _to_http_error(e: Exception) -> HTTPException:
    if isinstance(e, NoSearchBackendError | StoreUnavailableError | ConnectionError):
        return HTTPException(status_code=503, detail=str(e))
    return HTTPException(status_code=500, detail=f"Index update failed: {e!s}")


@router.post(
    "/index",
    response_model=IndexResponse,
    summary="Index Bookmarks",
    description="Load the given bookmarks from the store and (re)index them on the active backend.",
)
async def index_bookmarks(
    request: IndexRequest,
    engine: SearchEngine = Depends(get_engine),
) -> IndexResponse:
    try:
        indexed = await engine.index_bookmarks(request.bookmark_ids)
    except (NoSearchBackendError, AdapterError) as e:
        logger.error("Indexing failed: %s", e)
        raise _to_http_error(e) from e
    return IndexResponse(indexed=indexed)


@router.delete(
    "/index/{bookmark_id}",
    response_model=IndexResponse,
    summary="Remove Bookmark",
    description="Remove one bookmark from the active backend's index.",
)
async def remove_bookmark(
    bookmark_id: str,
    engine: SearchEngine = Depends(get_engine),
) -> IndexResponse:
    try:
        await engine.remove_bookmarks([bookmark_id])
    except (NoSearchBackendError, AdapterError) as e:
        logger.error("Index removal failed: %s", e)
        raise _to_http_error(e) from e
    return IndexResponse(deleted=1)
