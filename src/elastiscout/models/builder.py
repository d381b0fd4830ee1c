"""Criteria builder — Fluent construction of ``SearchCriteria``.

Usage::

    criteria = (
        engine.new_search(Post, "solar nowcasting")
        .where("published", True)
        .where("views", ">=", 100)
        .or_where("pinned", True)
        .order_by("published_at", "desc")
        .take(20)
        .to_criteria()
    )

Scopes installed on the engine's ``ScopeRegistry`` are available as
methods of the builder (``builder.published()``) or through
``builder.scope("published")``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from elastiscout.exceptions import ScopeNotFoundError
from elastiscout.models.criteria import FilterOperator, SearchCriteria

if TYPE_CHECKING:
    from elastiscout.models.searchable import Searchable
    from elastiscout.rules.base import RuleSpec
    from elastiscout.scopes.registry import ScopeRegistry

_MISSING = object()

_RANGE_OPERATORS = {">": "gt", "<": "lt", ">=": "gte", "<=": "lte"}
_EQUAL_OPERATORS = {"=", "=="}
_NOT_EQUAL_OPERATORS = {"!=", "<>"}


class CriteriaBuilder:
    """Mutable, chainable builder for one search request.

    Args:
        record_type: The searchable record type being queried.
        query: Free-text query, or None for a filter-only search.
        scopes: Registry that scope calls are resolved against.
        callback: Raw execution callback replacing compilation entirely.
    """

    def __init__(
        self,
        record_type: type[Searchable],
        query: str | None = None,
        *,
        scopes: ScopeRegistry | None = None,
        callback: Callable[..., Any] | None = None,
    ) -> None:
        self.record_type = record_type
        self.query = query
        self.scopes = scopes
        self.callback = callback
        self.rules: list[RuleSpec] = []
        self.wheres: dict[str, list[dict[str, Any]]] = {}
        self.orders: list[dict[str, Any]] = []
        self.columns: list[str] = []
        self.collapse_field: str | None = None
        self.offset: int | None = None
        self.limit: int | None = None
        self.aggregations: dict[str, Any] = {}
        self.min_should_match: int | str | None = None

    # ── Filters ──────────────────────────────────────────────────────────

    def where(self, field: str, operator: Any, value: Any = _MISSING) -> CriteriaBuilder:
        """Add a term or range filter.

        ``where("status", "draft")`` is shorthand for
        ``where("status", "=", "draft")``. Supported operators: ``=``,
        ``!=``/``<>``, ``>``, ``<``, ``>=``, ``<=``.
        """
        occurrence, clause = self._comparison(field, operator, value)
        return self._push(occurrence, clause)

    def or_where(self, field: str, operator: Any, value: Any = _MISSING) -> CriteriaBuilder:
        """Add a filter to the ``should`` group."""
        occurrence, clause = self._comparison(field, operator, value)
        if occurrence == FilterOperator.NOT.value:
            clause = {"bool": {"must_not": clause}}
        return self._push(FilterOperator.OR.value, clause)

    def where_not(self, field: str, value: Any) -> CriteriaBuilder:
        return self._push(FilterOperator.NOT.value, {"term": {field: value}})

    def where_in(self, field: str, values: list[Any]) -> CriteriaBuilder:
        return self._push(FilterOperator.AND.value, {"terms": {field: list(values)}})

    def where_not_in(self, field: str, values: list[Any]) -> CriteriaBuilder:
        return self._push(FilterOperator.NOT.value, {"terms": {field: list(values)}})

    def where_between(self, field: str, low: Any, high: Any) -> CriteriaBuilder:
        return self._push(FilterOperator.AND.value, {"range": {field: {"gte": low, "lte": high}}})

    def where_not_between(self, field: str, low: Any, high: Any) -> CriteriaBuilder:
        return self._push(FilterOperator.NOT.value, {"range": {field: {"gte": low, "lte": high}}})

    def where_exists(self, field: str) -> CriteriaBuilder:
        return self._push(FilterOperator.AND.value, {"exists": {"field": field}})

    def where_not_exists(self, field: str) -> CriteriaBuilder:
        return self._push(FilterOperator.NOT.value, {"exists": {"field": field}})

    def where_match(self, field: str, value: str) -> CriteriaBuilder:
        return self._push(FilterOperator.AND.value, {"match": {field: value}})

    def where_not_match(self, field: str, value: str) -> CriteriaBuilder:
        return self._push(FilterOperator.NOT.value, {"match": {field: value}})

    def where_regexp(self, field: str, pattern: str, flags: str = "ALL") -> CriteriaBuilder:
        return self._push(FilterOperator.AND.value, {"regexp": {field: {"value": pattern, "flags": flags}}})

    def where_geo_distance(self, field: str, point: Any, distance: str) -> CriteriaBuilder:
        return self._push(FilterOperator.AND.value, {"geo_distance": {"distance": distance, field: point}})

    def filter(self, operator: FilterOperator | str, clause: dict[str, Any]) -> CriteriaBuilder:
        """Add a raw filter clause under ``operator``."""
        return self._push(FilterOperator.parse(operator).value, clause)

    # ── Shape of the response ────────────────────────────────────────────

    def order_by(self, field: str, direction: str = "asc") -> CriteriaBuilder:
        self.orders.append({field: direction.lower()})
        return self

    def select(self, *fields: str) -> CriteriaBuilder:
        self.columns.extend(fields)
        return self

    def collapse(self, field: str) -> CriteriaBuilder:
        self.collapse_field = field
        return self

    def skip(self, offset: int) -> CriteriaBuilder:
        self.offset = offset
        return self

    def take(self, limit: int) -> CriteriaBuilder:
        self.limit = limit
        return self

    def aggregate(self, name: str, spec: dict[str, Any]) -> CriteriaBuilder:
        self.aggregations[name] = spec
        return self

    def minimum_should_match(self, value: int | str) -> CriteriaBuilder:
        self.min_should_match = value
        return self

    def rule(self, *rules: RuleSpec) -> CriteriaBuilder:
        """Use ``rules`` instead of the record type's declared rules."""
        self.rules.extend(rules)
        return self

    def using(self, callback: Callable[..., Any]) -> CriteriaBuilder:
        """Execute with ``callback(client, query, options)`` instead of compiled payloads."""
        self.callback = callback
        return self

    # ── Scopes ───────────────────────────────────────────────────────────

    def scope(self, name: str, *args: Any, **kwargs: Any) -> CriteriaBuilder:
        """Apply the installed scope ``name`` to this builder."""
        extension = self.scopes.resolve(self.record_type, name) if self.scopes else None
        if extension is None:
            raise ScopeNotFoundError(f"No scope '{name}' installed for {self.record_type.__name__}")
        extension(self, *args, **kwargs)
        return self

    def __getattr__(self, name: str) -> Callable[..., CriteriaBuilder]:
        # Only reached for attributes that do not exist on the builder.
        if name.startswith("_"):
            raise AttributeError(name)
        scopes = self.__dict__.get("scopes")
        if scopes is None or scopes.resolve(self.record_type, name) is None:
            raise ScopeNotFoundError(f"'{type(self).__name__}' has no attribute or scope '{name}'")

        def apply(*args: Any, **kwargs: Any) -> CriteriaBuilder:
            return self.scope(name, *args, **kwargs)

        return apply

    # ── Output ───────────────────────────────────────────────────────────

    def to_criteria(self) -> SearchCriteria:
        """Snapshot the builder into an immutable ``SearchCriteria``."""
        return SearchCriteria(
            record_type=self.record_type,
            query=self.query,
            rules=tuple(self.rules),
            wheres={occurrence: list(clauses) for occurrence, clauses in self.wheres.items()},
            orders=list(self.orders),
            select=list(self.columns),
            collapse=self.collapse_field,
            offset=self.offset,
            limit=self.limit,
            aggregations=dict(self.aggregations),
            minimum_should_match=self.min_should_match,
            callback=self.callback,
        )

    # ── Helpers ──────────────────────────────────────────────────────────

    def _push(self, occurrence: str, clause: dict[str, Any]) -> CriteriaBuilder:
        self.wheres.setdefault(occurrence, []).append(clause)
        return self

    @staticmethod
    def _comparison(field: str, operator: Any, value: Any) -> tuple[str, dict[str, Any]]:
        if value is _MISSING:
            operator, value = "=", operator
        if operator in _EQUAL_OPERATORS:
            return FilterOperator.AND.value, {"term": {field: value}}
        if operator in _NOT_EQUAL_OPERATORS:
            return FilterOperator.NOT.value, {"term": {field: value}}
        if operator in _RANGE_OPERATORS:
            return FilterOperator.AND.value, {"range": {field: {_RANGE_OPERATORS[operator]: value}}}
        raise ValueError(f"Unsupported where operator: {operator!r}")
