"""Search client exceptions."""

from elastiscout.exceptions import ElastiScoutError


class ClientError(ElastiScoutError):
    """Base exception for search client errors."""


class ConnectionError(ClientError):
    """Raised when the client cannot reach the search cluster."""


class QueryError(ClientError):
    """Raised when a search or count request fails."""
