"""ElastiScout — Rule-prioritized full-text search over persisted records.

Quick start::

    from elastiscout import ElasticEngine, Searchable
    from elastiscout.clients import HttpSearchClient

    client = HttpSearchClient(hosts=["http://localhost:9200"])
    await client.initialize()
    engine = ElasticEngine(client, store)

    criteria = engine.new_search(Post, "solar").where("published", True).to_criteria()
    records = await engine.get(criteria)
"""

from elastiscout.core.engine import ElasticEngine
from elastiscout.exceptions import ConfigurationError, ElastiScoutError, InvalidPath, ScopeNotFoundError
from elastiscout.models import (
    CompileOptions,
    CriteriaBuilder,
    FilterOperator,
    Highlight,
    Hit,
    MappedRecord,
    SearchCriteria,
    SearchResults,
    Searchable,
)
from elastiscout.rules import CallableRule, QueryStringRule, SearchRule
from elastiscout.scopes import ScopeExtension, ScopeRegistry

__version__ = "0.1.0"

__all__ = [
    "CallableRule",
    "CompileOptions",
    "ConfigurationError",
    "CriteriaBuilder",
    "ElastiScoutError",
    "ElasticEngine",
    "FilterOperator",
    "Highlight",
    "Hit",
    "InvalidPath",
    "MappedRecord",
    "QueryStringRule",
    "ScopeExtension",
    "ScopeNotFoundError",
    "ScopeRegistry",
    "SearchCriteria",
    "SearchResults",
    "SearchRule",
    "Searchable",
]
