"""Default rule: run the query text through the engine's ``query_string`` parser."""

from __future__ import annotations

from typing import Any

from elastiscout.rules.base import SearchRule


class QueryStringRule(SearchRule):
    """Match the criteria's query text with a ``query_string`` query."""

    def build_query_payload(self) -> dict[str, Any]:
        return {
            "must": {
                "query_string": {
                    "query": self.criteria.query if self.criteria else "",
                },
            },
        }
