"""Collaborator interfaces consumed by the search pipeline.

None of these are implemented by the core. ``elastiscout.clients`` ships
``SearchClient`` adapters for Elasticsearch-compatible clusters; record
stores and indexers belong to the application.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from elastiscout.models.searchable import Searchable


@runtime_checkable
class SearchClient(Protocol):
    """Executes compiled payloads (``{"index": ..., "body": {...}}``)."""

    async def search(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Return the engine's search response (``hits.total.value``, ``hits.hits``)."""
        ...

    async def count(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Return the engine's count response (``count``)."""
        ...


class RecordStore(Protocol):
    """Persistent store holding the records behind the index."""

    async def fetch_by_keys(
        self,
        record_type: type[Searchable],
        keys: Sequence[str],
        columns: Sequence[str],
        include_soft_deleted: bool,
    ) -> Iterable[Any]:
        """Fetch the records whose key is in ``keys`` in one batch.

        ``columns`` is ``["*"]`` for all fields.
        """
        ...

    def cursor_by_keys(
        self,
        record_type: type[Searchable],
        keys: Sequence[str],
        columns: Sequence[str],
        include_soft_deleted: bool,
    ) -> AsyncIterator[Any]:
        """Stream the records whose key is in ``keys``."""
        ...

    def cursor_all(self, record_type: type[Searchable], include_soft_deleted: bool) -> AsyncIterator[Any]:
        """Stream every record of ``record_type`` ordered by key."""
        ...


class Indexer(Protocol):
    """Write path into the search index."""

    async def update(self, records: Sequence[Any]) -> None: ...

    async def delete(self, records: Sequence[Any]) -> None: ...
