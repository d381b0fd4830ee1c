"""HTTP search client — Elasticsearch REST API over ``httpx``.

Talks to any Elasticsearch-compatible cluster (Elasticsearch v7+, OpenSearch)
through its JSON REST endpoints. No extra dependencies beyond ``httpx``.

Usage::

    client = HttpSearchClient(hosts=["http://localhost:9200"])
    await client.initialize()
    response = await client.search({"index": "posts", "body": {...}})
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import Any

import httpx

from elastiscout.clients.base import BaseSearchClient, ClientHealth
from elastiscout.clients.exceptions import ConnectionError, QueryError

logger = logging.getLogger(__name__)


class HttpSearchClient(BaseSearchClient):
    """Search client for the Elasticsearch REST API.

    Only the first host is used; put a load balancer in front of multi-node
    clusters.

    Args:
        hosts: Cluster node URLs.
        username: Optional HTTP basic-auth username.
        password: Optional HTTP basic-auth password.
        api_key: Optional encoded API key (``Authorization: ApiKey ...``).
        verify_certs: Whether to verify TLS certificates.
        timeout: HTTP request timeout in seconds.
        index_prefix: Prefix prepended to every index name.
    """

    def __init__(
        self,
        hosts: list[str] | None = None,
        username: str | None = None,
        password: str | None = None,
        api_key: str | None = None,
        verify_certs: bool = True,
        timeout: float = 30.0,
        index_prefix: str = "",
    ) -> None:
        super().__init__(index_prefix)
        self._base_url = (hosts or ["http://localhost:9200"])[0].rstrip("/")
        self._username = username
        self._password = password
        self._api_key = api_key
        self._verify_certs = verify_certs
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        return "http"

    async def initialize(self) -> None:
        """Create an ``httpx.AsyncClient`` and query the cluster root."""
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"ApiKey {self._api_key}"

        auth = None
        if self._username and self._password:
            auth = httpx.BasicAuth(self._username, self._password)

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            headers=headers,
            auth=auth,
            verify=self._verify_certs,
        )

        try:
            resp = await self._client.get("/")
            resp.raise_for_status()
            info = resp.json()
            logger.info(
                "Connected to cluster %s (v%s) at %s",
                info.get("cluster_name", "unknown"),
                info.get("version", {}).get("number", "unknown"),
                self._base_url,
            )
        except httpx.HTTPError as e:
            raise ConnectionError(f"Failed to connect to {self._base_url}: {e}") from e

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST the payload body to ``/{index}/_search``."""
        return await self._post(f"/{self._index(payload)}/_search", payload.get("body", {}))

    async def count(self, payload: dict[str, Any]) -> dict[str, Any]:
        """POST the payload query to ``/{index}/_count``."""
        return await self._post(f"/{self._index(payload)}/_count", self._count_body(payload))

    async def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        if not self._client:
            raise ConnectionError("HTTP search client not initialized.")
        try:
            resp = await self._client.post(path, json=body)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError as e:
            raise QueryError(f"Request to {path} failed: {e}") from e

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> ClientHealth:
        """Check ``/_cluster/health``."""
        if not self._client:
            return ClientHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            resp = await self._client.get("/_cluster/health")
            resp.raise_for_status()
            latency_ms = int((time.monotonic() - start) * 1000)
            health = resp.json()

            return ClientHealth(
                status=ClientHealth.status_from_cluster(health.get("status")),
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Cluster: {health.get('cluster_name')}, Nodes: {health.get('number_of_nodes')}",
            )
        except Exception as e:
            return ClientHealth(status="unhealthy", message=str(e))
