"""Search response models — Uniform output shared by every search backend."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SearchHit(BaseModel):
    """A single matching bookmark with its relevance score."""

    id: str = Field(description="Bookmark identifier")
    score: float = Field(ge=0.0, le=1.0, description="Relevance score in [0, 1]")


class SearchResponse(BaseModel):
    """Result of one search call.

    ``hits`` is ordered by descending score. ``total_hits`` counts the full
    filtered set, not the returned page.
    """

    hits: list[SearchHit] = Field(default_factory=list, description="Hits, best first")
    total_hits: int = Field(default=0, ge=0, description="Number of records matching the query")
    processing_time_ms: int = Field(default=0, ge=0, description="Time spent answering the query in ms")

    @classmethod
    def empty(cls, processing_time_ms: int = 0) -> SearchResponse:
        return cls(hits=[], total_hits=0, processing_time_ms=processing_time_ms)
