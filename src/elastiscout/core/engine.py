"""ElastiScout Engine — Search entry point for searchable record types.

The engine manages the full request lifecycle:
  1. Compilation: criteria + rules → ordered payloads
  2. Execution: payloads → first non-empty engine response
  3. Mapping: hits → stored records enriched with score and highlight

It also owns the scope registry handed to every criteria builder it creates
and forwards index writes to the configured indexer.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator, Sequence
from typing import TYPE_CHECKING, Any

from elastiscout.core.compiler import QueryCompiler
from elastiscout.core.executor import SearchExecutor
from elastiscout.core.mapper import ResultMapper
from elastiscout.exceptions import ConfigurationError
from elastiscout.models.builder import CriteriaBuilder
from elastiscout.models.criteria import CompileOptions, SearchCriteria
from elastiscout.models.results import MappedRecord, SearchResults
from elastiscout.scopes.registry import ScopeRegistry

if TYPE_CHECKING:
    from elastiscout.config.settings import Settings
    from elastiscout.core.interfaces import Indexer, RecordStore, SearchClient
    from elastiscout.models.searchable import Searchable

logger = logging.getLogger(__name__)

FLUSH_CHUNK_SIZE = 500


class ElasticEngine:
    """Search engine bridging record types and an Elasticsearch-compatible cluster.

    Pipeline:
      CriteriaBuilder → SearchCriteria
                      → [QueryCompiler] → payloads (one per applicable rule)
                      → [SearchExecutor] → first non-empty response
                      → [ResultMapper] → MappedRecord*

    Attributes:
        client: Search client payloads are sent to.
        store: Record store hits are mapped against.
        indexer: Optional write path for ``update`` / ``delete`` / ``flush``.
        scopes: Scope registry shared by the builders this engine creates.
    """

    def __init__(
        self,
        client: SearchClient,
        store: RecordStore,
        indexer: Indexer | None = None,
        settings: Settings | None = None,
        scopes: ScopeRegistry | None = None,
    ) -> None:
        key_delimiter = settings.engine.key_delimiter if settings else "_"
        self.client = client
        self.store = store
        self.indexer = indexer
        self.settings = settings
        self.scopes = scopes or ScopeRegistry()
        self.compiler = QueryCompiler()
        self.executor = SearchExecutor(client, self.compiler)
        self.mapper = ResultMapper(store, key_delimiter=key_delimiter)
        self._highlight = settings.engine.highlight if settings else True

    # ── Record types ─────────────────────────────────────────────────────

    def boot(self, record_type: type[Searchable]) -> list[str]:
        """Install the scopes declared by ``record_type``."""
        return self.scopes.boot(record_type)

    def new_search(self, record_type: type[Searchable], query: str | None = None) -> CriteriaBuilder:
        """Start a criteria builder for ``record_type`` with its scopes available."""
        if not self.scopes.is_booted(record_type):
            self.boot(record_type)
        return CriteriaBuilder(record_type, query, scopes=self.scopes)

    # ── Index writes ─────────────────────────────────────────────────────

    async def update(self, records: Sequence[Any]) -> None:
        await self._require_indexer().update(records)

    async def delete(self, records: Sequence[Any]) -> None:
        await self._require_indexer().delete(records)

    async def flush(self, record_type: type[Searchable]) -> int:
        """Remove every stored record of ``record_type``, soft-deleted ones included, from the index.

        Returns:
            Number of records handed to the indexer.
        """
        indexer = self._require_indexer()
        removed = 0
        chunk: list[Any] = []
        async for record in self.store.cursor_all(record_type, include_soft_deleted=True):
            chunk.append(record)
            if len(chunk) >= FLUSH_CHUNK_SIZE:
                await indexer.delete(chunk)
                removed += len(chunk)
                chunk = []
        if chunk:
            await indexer.delete(chunk)
            removed += len(chunk)
        logger.info("Flushed %d %s record(s) from the index", removed, record_type.__name__)
        return removed

    # ── Compilation & execution ──────────────────────────────────────────

    def build_payloads(self, criteria: SearchCriteria, options: CompileOptions | None = None) -> list[dict[str, Any]]:
        return self.compiler.compile(criteria, options or self._options())

    async def search(self, criteria: SearchCriteria, options: CompileOptions | None = None) -> SearchResults:
        """Execute ``criteria`` and return the winning raw response."""
        start = time.monotonic()
        results = await self.executor.search(criteria, options or self._options())
        logger.info(
            "Search on %s matched %d hit(s) in %d ms",
            criteria.record_type.__name__,
            results.total,
            int((time.monotonic() - start) * 1000),
        )
        return results

    async def paginate(self, criteria: SearchCriteria, per_page: int, page: int) -> SearchResults:
        """Search one page (1-based) of ``per_page`` results."""
        return await self.search(criteria.paginated(per_page, page))

    async def explain(self, criteria: SearchCriteria) -> SearchResults:
        return await self.search(criteria, self._options(explain=True))

    async def profile(self, criteria: SearchCriteria) -> SearchResults:
        return await self.search(criteria, self._options(profile=True))

    async def aggregations(self, criteria: SearchCriteria, aggregations: dict[str, Any]) -> SearchResults:
        """Search with ``aggregations`` replacing the criteria's own."""
        return await self.search(criteria.with_aggregations(aggregations))

    async def count(self, criteria: SearchCriteria) -> int:
        return await self.executor.count(criteria)

    async def search_raw(self, record_type: type[Searchable], body: dict[str, Any]) -> dict[str, Any]:
        """Send a hand-written query body to the index of ``record_type``."""
        return await self.executor.search_raw(record_type, body)

    # ── Mapping ──────────────────────────────────────────────────────────

    def map_ids(self, results: SearchResults) -> list[str]:
        return self.mapper.map_ids(results)

    async def map(self, criteria: SearchCriteria, results: SearchResults) -> list[MappedRecord]:
        return await self.mapper.map(criteria.record_type, results)

    def lazy_map(self, criteria: SearchCriteria, results: SearchResults) -> AsyncIterator[MappedRecord]:
        return self.mapper.lazy_map(criteria.record_type, results)

    @staticmethod
    def get_total_count(results: SearchResults) -> int:
        return results.total

    async def get(self, criteria: SearchCriteria) -> list[MappedRecord]:
        """Search and map the winning hits to records."""
        results = await self.search(criteria)
        return await self.map(criteria, results)

    async def cursor(self, criteria: SearchCriteria) -> AsyncIterator[MappedRecord]:
        """Search and stream the winning hits as records."""
        results = await self.search(criteria)
        async for record in self.lazy_map(criteria, results):
            yield record

    # ── Helpers ──────────────────────────────────────────────────────────

    def _options(self, **overrides: bool) -> CompileOptions:
        return CompileOptions(highlight=self._highlight, **overrides)

    def _require_indexer(self) -> Indexer:
        if self.indexer is None:
            raise ConfigurationError("No indexer configured for this engine.")
        return self.indexer
