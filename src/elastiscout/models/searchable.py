"""Searchable record type declaration.

A record type opts into search by subclassing ``Searchable`` (usually as a
mixin next to its own model base) and declaring class-level settings::

    class Post(Searchable, BaseModel):
        search_index = "posts"
        soft_deletes = True
        search_rules = (TitleRule, QueryStringRule)
        search_scopes = (ScopeExtension("published", published),)

        id: int
        title: str
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, ClassVar

from elastiscout.rules.query_string import QueryStringRule

if TYPE_CHECKING:
    from elastiscout.rules.base import RuleSpec
    from elastiscout.scopes.registry import ScopeExtension


class Searchable:
    """Mixin carrying the search configuration of a record type."""

    search_index: ClassVar[str] = ""
    key_name: ClassVar[str] = "id"
    soft_deletes: ClassVar[bool] = False
    search_rules: ClassVar[Sequence[RuleSpec]] = (QueryStringRule,)
    search_scopes: ClassVar[Sequence[ScopeExtension | str]] = ()

    @classmethod
    def index_name(cls) -> str:
        """Index name; defaults to the lower-cased class name."""
        return cls.search_index or cls.__name__.lower()

    @classmethod
    def get_search_rules(cls) -> list[RuleSpec]:
        return list(cls.search_rules)

    @classmethod
    def key_of(cls, record: Any) -> str:
        """Return the persisted key of ``record`` as a string.

        Records may be attribute objects or plain mappings.
        """
        if isinstance(record, Mapping):
            return str(record[cls.key_name])
        return str(getattr(record, cls.key_name))
