"""Search criteria — Immutable description of one search request."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FilterOperator(str, Enum):
    """Boolean operator a filter clause group is combined with.

    Values are the engine's ``bool`` query occurrence keys.
    """

    AND = "must"
    OR = "should"
    NOT = "must_not"

    @classmethod
    def parse(cls, value: FilterOperator | str) -> FilterOperator:
        """Accept an operator, its occurrence key (``"should"``) or its name (``"or"``)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            try:
                return cls[str(value).upper()]
            except KeyError:
                raise ValueError(f"Unknown filter operator: {value!r}") from None


class CompileOptions(BaseModel):
    """Per-call options for payload compilation."""

    model_config = ConfigDict(frozen=True)

    highlight: bool = Field(default=True, description="Attach rule highlight fragments")
    explain: bool = Field(default=False, description="Ask the engine to explain scoring")
    profile: bool = Field(default=False, description="Ask the engine to profile query execution")


class SearchCriteria(BaseModel):
    """Abstract search request compiled into engine payloads.

    A criteria with ``query=None`` is a filter-only search and compiles to a
    single match-all payload.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    record_type: Any = Field(description="Searchable record type being queried")
    query: str | None = Field(default=None, description="Free-text query; None for filter-only searches")
    rules: tuple[Any, ...] = Field(default=(), description="Explicit rule list overriding the record type's rules")
    wheres: dict[str, list[dict[str, Any]]] = Field(
        default_factory=dict,
        description="Filter clauses grouped by bool occurrence key (must / should / must_not)",
    )
    orders: list[dict[str, Any]] = Field(default_factory=list, description="Sort spec")
    select: list[str] = Field(default_factory=list, description="Source fields to return")
    collapse: str | None = Field(default=None, description="Field to collapse results on")
    offset: int | None = Field(default=None, ge=0, description="Pagination offset")
    limit: int | None = Field(default=None, ge=0, description="Pagination size")
    aggregations: dict[str, Any] = Field(default_factory=dict, description="Aggregation spec")
    minimum_should_match: int | str | None = Field(default=None, description="Minimum should-match threshold")
    callback: Callable[..., Any] | None = Field(
        default=None,
        description="Raw execution callback: fn(client, query, options)",
    )

    @property
    def is_text_search(self) -> bool:
        return self.query is not None

    def paginated(self, per_page: int, page: int) -> SearchCriteria:
        """Return a copy limited to ``page`` (1-based) of ``per_page`` results."""
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if per_page < 0:
            raise ValueError(f"per_page must be >= 0, got {per_page}")
        return self.model_copy(update={"offset": (page - 1) * per_page, "limit": per_page})

    def with_aggregations(self, aggregations: dict[str, Any]) -> SearchCriteria:
        return self.model_copy(update={"aggregations": dict(aggregations)})
