"""Search result models — Engine hits and the records they map back to."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Highlight(BaseModel):
    """Highlighted fragments of a hit, keyed by field name."""

    fragments: dict[str, list[str]] = Field(default_factory=dict, description="Field name -> fragments")

    def get(self, field: str) -> list[str]:
        return list(self.fragments.get(field, []))

    def as_string(self, field: str, separator: str = " ") -> str:
        """Join the fragments of ``field`` into one string."""
        return separator.join(self.fragments.get(field, []))

    def __contains__(self, field: object) -> bool:
        return field in self.fragments


class Hit(BaseModel):
    """A single engine match.

    Accepts both the engine's underscore-prefixed keys (``_id``, ``_score``,
    ``_source``) and their plain names.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    score: float | None = Field(default=None, validation_alias=AliasChoices("_score", "score"))
    source: dict[str, Any] = Field(default_factory=dict, validation_alias=AliasChoices("_source", "source"))
    highlight: dict[str, list[str]] | None = Field(default=None)

    def persisted_key(self, delimiter: str = "_") -> str:
        """Return the record key encoded in a ``<prefix><delimiter><key>`` id."""
        return self.id.split(delimiter)[-1]


class SearchResults(BaseModel):
    """Raw engine response together with the payload that produced it."""

    response: dict[str, Any] = Field(default_factory=dict, description="Raw search response")
    payload: dict[str, Any] | None = Field(default=None, description="Winning compiled payload, if any")

    @property
    def total(self) -> int:
        total = self.response.get("hits", {}).get("total", 0)
        if isinstance(total, dict):
            return int(total.get("value", 0) or 0)
        return int(total or 0)

    @property
    def hits(self) -> list[Hit]:
        return [Hit.model_validate(raw) for raw in self.response.get("hits", {}).get("hits", [])]

    @property
    def aggregations(self) -> dict[str, Any]:
        return self.response.get("aggregations", {})

    @property
    def selected_columns(self) -> list[str] | None:
        """Field selection of the winning payload, or None when all fields were requested."""
        if not self.payload:
            return None
        columns = self.payload.get("body", {}).get("_source")
        return list(columns) if columns is not None else None


class MappedRecord(BaseModel):
    """A stored record enriched with the score and highlight of its hit."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    record: Any = Field(description="Record returned by the record store")
    key: str = Field(description="Persisted record key")
    score: float | None = Field(default=None, description="Relevance score from the engine")
    highlight: Highlight | None = Field(default=None, description="Highlighted fragments, if requested")
