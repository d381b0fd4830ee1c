"""Query Compiler — Turns search criteria into ordered engine payloads.

One payload is produced per applicable rule, in declaration order. A
filter-only criteria (no query text) or a record type without rules
compiles to a single match-all payload. Every payload then receives the
shared parts of the request: field selection, collapsing, sorting,
aggregations, pagination and the grouped filter clauses under
``body.query.bool.filter.bool.<occurrence>``.
"""

from __future__ import annotations

import logging
from typing import Any

from elastiscout.models.criteria import CompileOptions, SearchCriteria
from elastiscout.payloads.builder import IndexPayload
from elastiscout.rules.base import resolve_rule

logger = logging.getLogger(__name__)

FILTER_PATH = "body.query.bool.filter.bool"


class QueryCompiler:
    """Compiles ``SearchCriteria`` into payload documents."""

    def compile(self, criteria: SearchCriteria, options: CompileOptions | None = None) -> list[dict[str, Any]]:
        """Build the candidate payloads for ``criteria``.

        Args:
            criteria: The search request.
            options: Highlight / explain / profile switches.

        Returns:
            Payload documents ordered by rule priority.
        """
        options = options or CompileOptions()
        payloads = self._rule_payloads(criteria, options)
        compiled = [self._finish(payload, criteria, options).get() for payload in payloads]
        logger.debug("Compiled %d payload(s) for %s", len(compiled), criteria.record_type.__name__)
        return compiled

    def _rule_payloads(self, criteria: SearchCriteria, options: CompileOptions) -> list[IndexPayload]:
        record_type = criteria.record_type
        rules = list(criteria.rules) or record_type.get_search_rules()

        if not criteria.is_text_search or not rules:
            payload = IndexPayload(record_type)
            payload.set("body.query.bool.must.match_all", {})
            return [payload]

        payloads: list[IndexPayload] = []
        for declared in rules:
            rule = resolve_rule(declared, criteria)
            if not rule.is_applicable():
                logger.debug("Rule %s not applicable, skipping", type(rule).__name__)
                continue

            payload = IndexPayload(record_type)
            payload.set_if_not_empty("body.query.bool", rule.build_query_payload())
            if options.highlight:
                payload.set_if_not_empty("body.highlight", rule.build_highlight_payload())
            payloads.append(payload)
        return payloads

    @staticmethod
    def _finish(payload: IndexPayload, criteria: SearchCriteria, options: CompileOptions) -> IndexPayload:
        (
            payload.set_if_not_empty("body._source", criteria.select)
            .set_if_not_empty("body.collapse.field", criteria.collapse)
            .set_if_not_empty("body.sort", criteria.orders)
            .set_if_not_empty("body.aggregations", criteria.aggregations)
            .set_if_not_empty("body.explain", options.explain or None)
            .set_if_not_empty("body.profile", options.profile or None)
            .set_if_not_null("body.from", criteria.offset)
            .set_if_not_null("body.size", criteria.limit)
            .set_if_not_empty(f"{FILTER_PATH}.minimum_should_match", criteria.minimum_should_match)
        )

        for occurrence, clauses in criteria.wheres.items():
            path = f"{FILTER_PATH}.{occurrence}"
            existing = payload.get(path)
            if isinstance(existing, dict):
                # a rule may hold a single clause where a clause list is expected
                payload.set(path, [existing])
            payload.set_if_not_empty(path, list(clauses))

        return payload
