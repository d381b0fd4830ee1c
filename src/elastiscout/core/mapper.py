"""Result Mapper — Joins engine hits with the records they point to.

Hit ids have the form ``<prefix><delimiter><key>``; the persisted key is the
last delimiter-separated segment. Records are fetched from the record store
restricted to those keys (soft-deleted ones included for types that soft
delete), then emitted in hit order, each carrying the hit's score and
highlight. Hits whose record is gone from the store are dropped.

``map`` fetches every record in one batch; ``lazy_map`` reads a store cursor
only as far as each hit requires.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

from elastiscout.models.results import Highlight, Hit, MappedRecord, SearchResults

if TYPE_CHECKING:
    from elastiscout.core.interfaces import RecordStore
    from elastiscout.models.searchable import Searchable

logger = logging.getLogger(__name__)

ALL_COLUMNS = ["*"]


class ResultMapper:
    """Reconciles search results with a ``RecordStore``.

    Args:
        store: Store holding the persisted records.
        key_delimiter: Separator between the id prefix and the record key.
    """

    def __init__(self, store: RecordStore, key_delimiter: str = "_") -> None:
        self.store = store
        self.key_delimiter = key_delimiter

    def map_ids(self, results: SearchResults) -> list[str]:
        """Persisted keys of the hits, in hit order."""
        return [hit.persisted_key(self.key_delimiter) for hit in results.hits]

    async def map(self, record_type: type[Searchable], results: SearchResults) -> list[MappedRecord]:
        """Map hits to records using a single batch fetch."""
        if results.total == 0:
            return []

        hits = results.hits
        keys = [hit.persisted_key(self.key_delimiter) for hit in hits]
        records = await self.store.fetch_by_keys(
            record_type,
            keys,
            self._columns(record_type, results),
            record_type.soft_deletes,
        )
        by_key = {record_type.key_of(record): record for record in records}

        mapped: list[MappedRecord] = []
        for hit, key in zip(hits, keys, strict=True):
            record = by_key.get(key)
            if record is None:
                logger.debug("Dropping hit %s: no %s record with key %s", hit.id, record_type.__name__, key)
                continue
            mapped.append(self._enrich(record, key, hit))
        return mapped

    async def lazy_map(self, record_type: type[Searchable], results: SearchResults) -> AsyncIterator[MappedRecord]:
        """Map hits to records while streaming them from a store cursor."""
        if results.total == 0:
            return

        hits = results.hits
        keys = [hit.persisted_key(self.key_delimiter) for hit in hits]
        cursor = self.store.cursor_by_keys(
            record_type,
            keys,
            self._columns(record_type, results),
            record_type.soft_deletes,
        )
        seen: dict[str, Any] = {}
        exhausted = False
        try:
            for hit, key in zip(hits, keys, strict=True):
                while key not in seen and not exhausted:
                    try:
                        record = await anext(cursor)
                    except StopAsyncIteration:
                        exhausted = True
                        break
                    seen[record_type.key_of(record)] = record

                record = seen.get(key)
                if record is None:
                    logger.debug("Dropping hit %s: no %s record with key %s", hit.id, record_type.__name__, key)
                    continue
                yield self._enrich(record, key, hit)
        finally:
            aclose = getattr(cursor, "aclose", None)
            if aclose is not None:
                await aclose()

    @staticmethod
    def _columns(record_type: type[Searchable], results: SearchResults) -> list[str]:
        """Columns to fetch: the winning payload's ``_source`` plus the key, or all."""
        columns = results.selected_columns
        if columns is None:
            return list(ALL_COLUMNS)
        if record_type.key_name not in columns:
            columns.append(record_type.key_name)
        return columns

    @staticmethod
    def _enrich(record: Any, key: str, hit: Hit) -> MappedRecord:
        highlight = Highlight(fragments=hit.highlight) if hit.highlight is not None else None
        return MappedRecord(record=record, key=key, score=hit.score, highlight=highlight)
