"""Query scopes — Named criteria-builder extensions declared by record types."""

from elastiscout.scopes.registry import ScopeExtension, ScopeRegistry

__all__ = ["ScopeExtension", "ScopeRegistry"]
