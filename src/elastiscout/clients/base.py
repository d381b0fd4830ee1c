"""Base search client — Shared behavior of the cluster adapters.

Adapters implement the ``SearchClient`` protocol on top of an HTTP client
library and add lifecycle and health reporting:
  1. ``initialize()`` / ``shutdown()`` manage the connection
  2. ``search()`` / ``count()`` execute compiled payloads
  3. ``health_check()`` reports cluster status
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

_CLUSTER_STATUS = {"green": "healthy", "yellow": "degraded", "red": "unhealthy"}


class ClientHealth(BaseModel):
    """Health status of a search client."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")

    @staticmethod
    def status_from_cluster(cluster_status: str | None) -> str:
        return _CLUSTER_STATUS.get(cluster_status or "red", "unhealthy")


class BaseSearchClient(ABC):
    """Abstract base class for cluster adapters.

    Args:
        index_prefix: Prefix prepended to every payload's index name.
    """

    def __init__(self, index_prefix: str = "") -> None:
        self._index_prefix = index_prefix

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique client name (e.g., 'http', 'opensearch')."""

    @abstractmethod
    async def initialize(self) -> None:
        """Open the connection and verify the cluster is reachable."""

    @abstractmethod
    async def shutdown(self) -> None:
        """Close the connection."""

    @abstractmethod
    async def search(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Execute a compiled search payload."""

    @abstractmethod
    async def count(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Count the matches of a compiled payload."""

    @abstractmethod
    async def health_check(self) -> ClientHealth:
        """Report cluster health."""

    def _index(self, payload: dict[str, Any]) -> str:
        return f"{self._index_prefix}{payload.get('index', '_all')}"

    @staticmethod
    def _count_body(payload: dict[str, Any]) -> dict[str, Any]:
        """The count API only accepts the ``query`` part of a search body."""
        query = payload.get("body", {}).get("query")
        return {"query": query} if query else {}
