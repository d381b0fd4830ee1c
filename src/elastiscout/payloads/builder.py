"""Payload builder — Nested query document with dot-path setters.

Paths are dot-separated (``"body.query.bool.must"``). Intermediate mappings
are created on demand. Conditional setters skip values that would produce
an empty or meaningless key in the engine query DSL::

    payload = PayloadBuilder()
    payload.set_if_not_empty("body._source", ["title"])
    payload.set_if_not_null("body.from", 0)
    payload.get()
    # {"body": {"_source": ["title"], "from": 0}}
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from elastiscout.exceptions import InvalidPath

if TYPE_CHECKING:
    from elastiscout.models.searchable import Searchable

_MISSING = object()


def is_empty(value: Any) -> bool:
    """Return True for ``None``, ``""`` and empty collections."""
    if value is None:
        return True
    if isinstance(value, str | bytes):
        return len(value) == 0
    if isinstance(value, Mapping | list | tuple | set | frozenset):
        return len(value) == 0
    return False


class PayloadBuilder:
    """Mutable nested document addressed by dot-separated paths."""

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._payload: dict[str, Any] = copy.deepcopy(dict(initial)) if initial else {}

    def _parent(self, path: str) -> tuple[dict[str, Any], str]:
        """Walk to the mapping holding the last segment of ``path``, creating it if needed."""
        segments = path.split(".")
        node = self._payload
        for segment in segments[:-1]:
            child = node.get(segment, _MISSING)
            if child is _MISSING:
                child = node[segment] = {}
            node = self._as_mapping(child, segment, path)
        return node, segments[-1]

    def _find_parent(self, path: str) -> tuple[dict[str, Any] | None, str]:
        """Like ``_parent`` but never creates anything; None when a segment is missing."""
        segments = path.split(".")
        node = self._payload
        for segment in segments[:-1]:
            child = node.get(segment, _MISSING)
            if child is _MISSING:
                return None, segments[-1]
            node = self._as_mapping(child, segment, path)
        return node, segments[-1]

    @staticmethod
    def _as_mapping(value: Any, segment: str, path: str) -> dict[str, Any]:
        if not isinstance(value, dict):
            raise InvalidPath(f"Segment '{segment}' of path '{path}' holds a non-mapping value: {value!r}")
        return value

    def set(self, path: str, value: Any) -> PayloadBuilder:
        """Write ``value`` at ``path`` unconditionally."""
        parent, key = self._parent(path)
        parent[key] = copy.deepcopy(value)
        return self

    def set_if_not_empty(self, path: str, value: Any) -> PayloadBuilder:
        """Write ``value`` unless it is empty.

        When both the existing value and ``value`` are lists, the result is
        their concatenation.
        """
        if is_empty(value):
            return self
        parent, key = self._parent(path)
        existing = parent.get(key)
        if isinstance(existing, list) and isinstance(value, list | tuple):
            parent[key] = [*existing, *copy.deepcopy(list(value))]
        else:
            parent[key] = copy.deepcopy(value)
        return self

    def set_if_not_null(self, path: str, value: Any) -> PayloadBuilder:
        """Write ``value`` unless it is ``None``; falsy values like ``0`` are kept."""
        if value is None:
            return self
        return self.set(path, value)

    def add(self, path: str, value: Any) -> PayloadBuilder:
        """Append ``value`` to the list at ``path``, creating the list if needed."""
        parent, key = self._parent(path)
        existing = parent.get(key)
        if existing is None:
            parent[key] = [value]
        elif isinstance(existing, list):
            existing.append(value)
        else:
            raise InvalidPath(f"Path '{path}' holds a non-list value: {existing!r}")
        return self

    def add_if_not_empty(self, path: str, value: Any) -> PayloadBuilder:
        if is_empty(value):
            return self
        return self.add(path, value)

    def has(self, path: str) -> bool:
        try:
            parent, key = self._find_parent(path)
        except InvalidPath:
            return False
        return parent is not None and key in parent

    def get(self, path: str | None = None, default: Any = None) -> Any:
        """Return the value at ``path``, or a copy of the whole document."""
        if path is None:
            return copy.deepcopy(self._payload)
        parent, key = self._find_parent(path)
        if parent is None:
            return default
        return parent.get(key, default)


class IndexPayload(PayloadBuilder):
    """Payload addressed to the index of a searchable record type."""

    def __init__(self, record_type: type[Searchable]) -> None:
        super().__init__({"index": record_type.index_name()})
        self.record_type = record_type
