"""Scope Registry — Named query extensions installed per record type.

A scope is a reusable function that mutates a criteria builder::

    def published(builder: CriteriaBuilder, since: str | None = None) -> None:
        builder.where("published", True)
        if since:
            builder.where("published_at", ">=", since)

Record types list their scopes explicitly; the registry installs them when
the type boots, and every ``CriteriaBuilder`` created by the owning engine
can then call them by name::

    class Post(Searchable):
        search_scopes = (ScopeExtension("published", published),)

    registry.boot(Post)
    engine.new_search(Post, "solar").published(since="2024-01-01")
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from types import FunctionType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from elastiscout.models.builder import CriteriaBuilder
    from elastiscout.models.searchable import Searchable

logger = logging.getLogger(__name__)

ScopeFunction = Callable[..., None]


@dataclass(frozen=True)
class ScopeExtension:
    """A named scope function with the ``fn(builder, *args, **kwargs)`` interface."""

    name: str
    fn: ScopeFunction

    def __call__(self, builder: CriteriaBuilder, *args: Any, **kwargs: Any) -> None:
        self.fn(builder, *args, **kwargs)


class ScopeRegistry:
    """Capability registry shared by all criteria builders of an engine.

    Extensions are keyed by (record type, name). Registering the same pair
    again keeps the first extension and reports that nothing was installed.

    Example:
        >>> registry = ScopeRegistry()
        >>> registry.boot(Post)
        ['published']
        >>> registry.resolve(Post, "published")
        ScopeExtension(name='published', fn=<function published ...>)
    """

    def __init__(self) -> None:
        self._extensions: dict[type, dict[str, ScopeExtension]] = {}

    def boot(self, record_type: type[Searchable]) -> list[str]:
        """Install the scopes a record type declares.

        Entries may be ``ScopeExtension`` objects or names of callable
        attributes on the type. Instance methods (``def published(self, builder)``)
        are bound to a bare instance of the type, so ``self`` is never the
        builder. Names with no matching callable are skipped.

        Returns:
            Names newly installed by this call.
        """
        self._extensions.setdefault(record_type, {})
        installed: list[str] = []
        for entry in getattr(record_type, "search_scopes", ()):
            extension = self._to_extension(record_type, entry)
            if extension is None:
                logger.debug("Skipping scope %r on %s: no matching callable", entry, record_type.__name__)
                continue
            if self.register(record_type, extension):
                installed.append(extension.name)
        if installed:
            logger.info("Installed scopes on %s: %s", record_type.__name__, ", ".join(installed))
        return installed

    def register(self, record_type: type, extension: ScopeExtension) -> bool:
        """Install ``extension`` for ``record_type``.

        Returns:
            True if the extension was installed, False if the name was
            already taken for this type.
        """
        table = self._extensions.setdefault(record_type, {})
        current = table.setdefault(extension.name, extension)
        return current is extension

    def resolve(self, record_type: type, name: str) -> ScopeExtension | None:
        return self._extensions.get(record_type, {}).get(name)

    def installed(self, record_type: type) -> list[str]:
        """Names of the scopes installed for ``record_type``, in install order."""
        return list(self._extensions.get(record_type, {}))

    def is_booted(self, record_type: type) -> bool:
        return record_type in self._extensions

    @staticmethod
    def _to_extension(record_type: type, entry: ScopeExtension | str) -> ScopeExtension | None:
        if isinstance(entry, ScopeExtension):
            return entry
        if isinstance(inspect.getattr_static(record_type, entry, None), FunctionType):
            # instance method: bind to an instance created without running __init__
            return ScopeExtension(entry, getattr(record_type.__new__(record_type), entry))
        fn = getattr(record_type, entry, None)
        if not callable(fn):
            return None
        return ScopeExtension(entry, fn)
