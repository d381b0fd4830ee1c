"""Search rules — Prioritized query strategies for a record type."""

from elastiscout.rules.base import CallableRule, RuleSpec, SearchRule, resolve_rule
from elastiscout.rules.query_string import QueryStringRule

__all__ = ["CallableRule", "QueryStringRule", "RuleSpec", "SearchRule", "resolve_rule"]
