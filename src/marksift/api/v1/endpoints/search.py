"""Search endpoint — Owner-scoped bookmark search on the active backend."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from marksift.adapters.base.exceptions import AdapterError, ConnectionError, StoreUnavailableError
from marksift.adapters.base.registry import NoSearchBackendError
from marksift.api.deps import get_engine
from marksift.core.engine import SearchEngine
from marksift.models.query import SearchRequest
from marksift.models.response import SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/search",
    response_model=SearchResponse,
    summary="Bookmark Search",
    description=(
        "Search bookmarks on the active backend.\n\n"
        "`filter` must contain an owner clause (`\"userId = '<id>'\"` or "
        "`{\"field\": \"userId\", \"value\": \"<id>\"}`); without one the "
        "response is empty.\n\n"
        "Hits are ordered by descending score; `total_hits` counts every "
        "match regardless of `limit` / `offset`."
    ),
    responses={
        422: {"description": "Validation error — invalid request body"},
        503: {"description": "No search backend configured, or the backend is unreachable"},
    },
)
async def search(
    request: SearchRequest,
    engine: SearchEngine = Depends(get_engine),
) -> SearchResponse:
    options = request.to_options(engine.settings.search.default_limit)
    try:
        return await engine.search(options)
    except (NoSearchBackendError, StoreUnavailableError, ConnectionError) as e:
        logger.error("Search unavailable: %s", e)
        raise HTTPException(status_code=503, detail=str(e)) from e
    except AdapterError as e:
        logger.error("Search failed: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail=f"Search processing failed: {e!s}") from e
