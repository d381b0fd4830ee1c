"""OpenSearch client — Payload execution through ``opensearch-py`` (async).

Install the optional dependency::

    pip install elastiscout[opensearch]
    # or: pip install opensearch-py
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import Any

from elastiscout.clients.base import BaseSearchClient, ClientHealth
from elastiscout.clients.exceptions import ConnectionError, QueryError
from elastiscout.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class OpenSearchClient(BaseSearchClient):
    """Search client for OpenSearch (v2+) using ``AsyncOpenSearch``.

    Args:
        hosts: List of OpenSearch node URLs.
        username: Optional HTTP basic-auth username.
        password: Optional HTTP basic-auth password.
        verify_certs: Whether to verify TLS certificates.
        timeout: Request timeout in seconds.
        index_prefix: Prefix prepended to every index name.
        **kwargs: Additional keyword arguments forwarded to ``AsyncOpenSearch``.
    """

    def __init__(
        self,
        hosts: list[str] | None = None,
        username: str | None = None,
        password: str | None = None,
        verify_certs: bool = True,
        timeout: float = 30.0,
        index_prefix: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(index_prefix)
        self._hosts = hosts or ["https://localhost:9200"]
        self._username = username
        self._password = password
        self._verify_certs = verify_certs
        self._timeout = timeout
        self._extra_kwargs = kwargs
        self._client: Any = None

    @property
    def name(self) -> str:
        return "opensearch"

    async def initialize(self) -> None:
        """Create and verify the ``AsyncOpenSearch`` client."""
        try:
            from opensearchpy import AsyncOpenSearch
        except ImportError as e:
            raise ConfigurationError(
                "opensearch-py package is required.  Install with: pip install elastiscout[opensearch]"
            ) from e

        client_kwargs: dict[str, Any] = {
            "hosts": self._hosts,
            "verify_certs": self._verify_certs,
            "ssl_show_warn": False,
            "timeout": self._timeout,
        }
        if self._username and self._password:
            client_kwargs["http_auth"] = (self._username, self._password)

        client_kwargs.update(self._extra_kwargs)

        try:
            self._client = AsyncOpenSearch(**client_kwargs)
            info = await self._client.info()
            version = info.get("version", {}).get("number", "unknown")
            cluster = info.get("cluster_name", "unknown")
            logger.info("Connected to OpenSearch cluster: %s (v%s)", cluster, version)
        except Exception as e:
            raise ConnectionError(f"Failed to connect to OpenSearch: {e}") from e

    async def shutdown(self) -> None:
        """Close the OpenSearch client."""
        if self._client:
            await self._client.close()
            self._client = None

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, payload: dict[str, Any]) -> dict[str, Any]:
        if not self._client:
            raise ConnectionError("OpenSearch client not initialized.")
        try:
            response = await self._client.search(index=self._index(payload), body=payload.get("body", {}))
            return dict(response)
        except Exception as e:
            raise QueryError(f"OpenSearch query failed: {e}") from e

    async def count(self, payload: dict[str, Any]) -> dict[str, Any]:
        if not self._client:
            raise ConnectionError("OpenSearch client not initialized.")
        try:
            response = await self._client.count(index=self._index(payload), body=self._count_body(payload))
            return dict(response)
        except Exception as e:
            raise QueryError(f"OpenSearch count failed: {e}") from e

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> ClientHealth:
        """Check OpenSearch cluster health."""
        if not self._client:
            return ClientHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            health = await self._client.cluster.health()
            latency_ms = int((time.monotonic() - start) * 1000)

            return ClientHealth(
                status=ClientHealth.status_from_cluster(health.get("status")),
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Cluster: {health.get('cluster_name')}, Nodes: {health.get('number_of_nodes')}",
            )
        except Exception as e:
            return ClientHealth(status="unhealthy", message=str(e))
