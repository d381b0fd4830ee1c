"""Search Executor — Runs compiled payloads with priority fallback.

Payloads are executed one at a time in rule order. The first response with
a non-zero total wins and later payloads are never sent; when every payload
comes back empty the last response is returned. A criteria carrying a raw
callback skips compilation and hands the client straight to the callback.
"""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from elastiscout.core.compiler import QueryCompiler
from elastiscout.models.criteria import CompileOptions, SearchCriteria
from elastiscout.models.results import SearchResults
from elastiscout.payloads.builder import IndexPayload

if TYPE_CHECKING:
    from elastiscout.core.interfaces import SearchClient
    from elastiscout.models.searchable import Searchable

logger = logging.getLogger(__name__)


class ExecutionStrategy(ABC):
    """How one criteria is turned into a search response."""

    @abstractmethod
    async def execute(
        self,
        executor: SearchExecutor,
        criteria: SearchCriteria,
        options: CompileOptions,
    ) -> SearchResults:
        """Run the search described by ``criteria``."""


class CompiledPayloadStrategy(ExecutionStrategy):
    """Compile the criteria and execute the payloads in priority order."""

    async def execute(
        self,
        executor: SearchExecutor,
        criteria: SearchCriteria,
        options: CompileOptions,
    ) -> SearchResults:
        payloads = executor.compiler.compile(criteria, options)
        return await executor.execute_ordered(payloads)


class CallbackStrategy(ExecutionStrategy):
    """Delegate the search to the criteria's ``callback(client, query, options)``.

    The callback may be sync or async. A mapping result is taken as the raw
    engine response; a ``SearchResults`` is returned as is.
    """

    async def execute(
        self,
        executor: SearchExecutor,
        criteria: SearchCriteria,
        options: CompileOptions,
    ) -> SearchResults:
        callback = criteria.callback
        if callback is None:
            raise ValueError(f"{type(self).__name__} needs criteria with a callback")
        result = callback(executor.client, criteria.query, options.model_dump())
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, SearchResults):
            return result
        return SearchResults(response=dict(result or {}))


def select_strategy(criteria: SearchCriteria) -> ExecutionStrategy:
    """Pick the execution strategy for ``criteria``."""
    if criteria.callback is not None:
        return CallbackStrategy()
    return CompiledPayloadStrategy()


class SearchExecutor:
    """Executes criteria against a ``SearchClient``.

    Args:
        client: Search client the payloads are sent to.
        compiler: Payload compiler; a default ``QueryCompiler`` if omitted.
    """

    def __init__(self, client: SearchClient, compiler: QueryCompiler | None = None) -> None:
        self.client = client
        self.compiler = compiler or QueryCompiler()

    async def search(self, criteria: SearchCriteria, options: CompileOptions | None = None) -> SearchResults:
        options = options or CompileOptions()
        strategy = select_strategy(criteria)
        logger.debug("Executing %s with %s", criteria.record_type.__name__, type(strategy).__name__)
        return await strategy.execute(self, criteria, options)

    async def execute_ordered(self, payloads: Sequence[dict[str, Any]]) -> SearchResults:
        """Return the first non-empty response, or the last one if all are empty."""
        results = SearchResults()
        for position, payload in enumerate(payloads):
            response = await self.client.search(payload)
            results = SearchResults(response=dict(response), payload=payload)
            if results.total > 0:
                logger.debug("Payload %d/%d matched %d hit(s)", position + 1, len(payloads), results.total)
                return results
        if payloads:
            logger.debug("All %d payload(s) returned no hits", len(payloads))
        return results

    async def count(self, criteria: SearchCriteria) -> int:
        """Count matches with the same priority fallback, highlighting off."""
        payloads = self.compiler.compile(criteria, CompileOptions(highlight=False))
        count = 0
        for payload in payloads:
            response = await self.client.count(payload)
            count = int(response.get("count", 0) or 0)
            if count > 0:
                break
        return count

    async def search_raw(self, record_type: type[Searchable], body: dict[str, Any]) -> dict[str, Any]:
        """Send ``body`` as is to the index of ``record_type``."""
        payload = IndexPayload(record_type).set_if_not_empty("body", body).get()
        return await self.client.search(payload)
