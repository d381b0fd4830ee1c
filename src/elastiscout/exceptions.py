"""ElastiScout exceptions."""


class ElastiScoutError(Exception):
    """Base exception for ElastiScout errors."""


class InvalidPath(ElastiScoutError):
    """Raised when a payload path runs through a value that is not a mapping."""


class ScopeNotFoundError(ElastiScoutError, AttributeError):
    """Raised when a criteria builder is asked for a scope that is not installed."""


class ConfigurationError(ElastiScoutError):
    """Raised when the engine or a collaborator is misconfigured."""
