"""Query and search request models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

OWNER_FIELD = "userId"


class FilterConstraint(BaseModel):
    """A typed filter clause, e.g. ``userId = 'u1'``.

    Callers should prefer this over formatted strings; the string form is
    still accepted in ``SearchOptions.filter`` for compatibility.
    """

    model_config = ConfigDict(frozen=True)

    field: str = Field(description="Document field the constraint applies to")
    operator: str = Field(default="=", description="Comparison operator (only equality is supported)")
    value: str = Field(min_length=1, description="Literal value to compare against")

    @classmethod
    def owner(cls, user_id: str) -> FilterConstraint:
        """Build the owner constraint every search must carry."""
        return cls(field=OWNER_FIELD, operator="=", value=user_id)

    def to_expression(self) -> str:
        """Render the constraint as a filter expression string.

        Backslashes and single quotes in the value are backslash-escaped, so
        the value always stays one quoted literal.
        """
        escaped = self.value.replace("\\", "\\\\").replace("'", "\\'")
        return f"{self.field} {self.operator} '{escaped}'"


class SearchOptions(BaseModel):
    """Options controlling a single search call."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(default="", description="Free-text query, matched as a substring")
    filter: list[str | FilterConstraint] = Field(
        default_factory=list,
        description="Ordered filter clauses; an owner constraint is mandatory",
    )
    limit: int = Field(default=20, ge=0, description="Maximum number of hits to return")
    offset: int = Field(default=0, ge=0, description="Number of matching records to skip")


class SearchRequest(BaseModel):
    """Incoming search request from the API."""

    query: str = Field(default="", max_length=2000, description="Free-text query")
    filter: list[str | FilterConstraint] = Field(default_factory=list, description="Filter clauses")
    limit: int | None = Field(default=None, ge=0, le=1000, description="Page size (server default if omitted)")
    offset: int = Field(default=0, ge=0, description="Number of matching records to skip")

    def to_options(self, default_limit: int) -> SearchOptions:
        return SearchOptions(
            query=self.query,
            filter=self.filter,
            limit=default_limit if self.limit is None else self.limit,
            offset=self.offset,
        )


class IndexRequest(BaseModel):
    """Bookmarks to (re)index from the store."""

    bookmark_ids: list[str] = Field(min_length=1, max_length=1000, description="Bookmark identifiers")
