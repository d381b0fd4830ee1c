"""Search rules — Strategies that turn criteria into ``bool`` query fragments.

A record type declares an ordered list of rules. Each applicable rule yields
one candidate payload; the executor runs them in declaration order and keeps
the first one with hits, so broader rules should come last.

A rule list may contain:
  - ``SearchRule`` subclasses, instantiated with the criteria
  - ``SearchRule`` instances, copied and bound to the criteria
  - plain callables ``fn(criteria) -> dict``, wrapped in ``CallableRule``
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from elastiscout.models.criteria import SearchCriteria


class SearchRule(ABC):
    """Applicability test paired with query and highlight fragments.

    Args:
        criteria: The criteria the rule is evaluated against. Subclasses
            that are declared as instances may be built without it and get
            it bound by the compiler.
    """

    def __init__(self, criteria: SearchCriteria | None = None) -> None:
        self.criteria = criteria

    def bind(self, criteria: SearchCriteria) -> SearchRule:
        """Return a copy of this rule evaluated against ``criteria``.

        Declared rule instances are shared by every search of a record type
        and are never mutated.
        """
        bound = copy.copy(self)
        bound.criteria = criteria
        return bound

    def is_applicable(self) -> bool:
        """Whether this rule should produce a payload for the criteria."""
        return True

    @abstractmethod
    def build_query_payload(self) -> dict[str, Any]:
        """Return the fragment placed under ``query.bool``."""

    def build_highlight_payload(self) -> dict[str, Any] | None:
        """Return the fragment placed under ``highlight``, if any."""
        return None


class CallableRule(SearchRule):
    """Rule backed by a plain function ``fn(criteria) -> dict``.

    Callable rules are applicable unless ``applies`` says otherwise and never
    contribute a highlight.
    """

    def __init__(
        self,
        fn: Callable[[SearchCriteria], dict[str, Any] | None],
        criteria: SearchCriteria | None = None,
        applies: Callable[[SearchCriteria], bool] | None = None,
    ) -> None:
        super().__init__(criteria)
        self.fn = fn
        self.applies = applies

    def is_applicable(self) -> bool:
        if self.applies is None:
            return True
        return bool(self.applies(self.criteria))

    def build_query_payload(self) -> dict[str, Any]:
        return self.fn(self.criteria) or {}


RuleSpec: TypeAlias = "type[SearchRule] | SearchRule | Callable[[SearchCriteria], dict[str, Any] | None]"


def resolve_rule(rule: Any, criteria: SearchCriteria) -> SearchRule:
    """Turn a declared rule into a ``SearchRule`` bound to ``criteria``."""
    if isinstance(rule, type) and issubclass(rule, SearchRule):
        return rule(criteria)
    if isinstance(rule, SearchRule):
        return rule.bind(criteria)
    if callable(rule):
        return CallableRule(rule, criteria)
    raise TypeError(f"Unsupported search rule: {rule!r}")
