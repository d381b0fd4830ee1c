"""Search core — Compile, execute and map pipeline."""

from elastiscout.core.compiler import QueryCompiler
from elastiscout.core.engine import ElasticEngine
from elastiscout.core.executor import (
    CallbackStrategy,
    CompiledPayloadStrategy,
    ExecutionStrategy,
    SearchExecutor,
    select_strategy,
)
from elastiscout.core.interfaces import Indexer, RecordStore, SearchClient
from elastiscout.core.mapper import ResultMapper

__all__ = [
    "CallbackStrategy",
    "CompiledPayloadStrategy",
    "ElasticEngine",
    "ExecutionStrategy",
    "Indexer",
    "QueryCompiler",
    "RecordStore",
    "ResultMapper",
    "SearchClient",
    "SearchExecutor",
    "select_strategy",
]
