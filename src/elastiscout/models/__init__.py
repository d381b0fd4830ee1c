"""Search data models — Criteria, record type declarations and results."""

from elastiscout.models.builder import CriteriaBuilder
from elastiscout.models.criteria import CompileOptions, FilterOperator, SearchCriteria
from elastiscout.models.results import Highlight, Hit, MappedRecord, SearchResults
from elastiscout.models.searchable import Searchable

__all__ = [
    "CompileOptions",
    "CriteriaBuilder",
    "FilterOperator",
    "Highlight",
    "Hit",
    "MappedRecord",
    "SearchCriteria",
    "SearchResults",
    "Searchable",
]
