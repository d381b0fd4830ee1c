"""Search clients — Adapters executing payloads against a cluster.

Built-in clients:
  - http: Elasticsearch-compatible REST API over ``httpx``
  - opensearch: OpenSearch v2+ through ``opensearch-py`` (optional extra)

Any object with async ``search(payload)`` and ``count(payload)`` methods
satisfies ``elastiscout.core.interfaces.SearchClient``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from elastiscout.clients.base import BaseSearchClient, ClientHealth
from elastiscout.clients.http import HttpSearchClient
from elastiscout.clients.opensearch import OpenSearchClient

if TYPE_CHECKING:
    from elastiscout.config.settings import SearchClientSettings

__all__ = ["BaseSearchClient", "ClientHealth", "HttpSearchClient", "OpenSearchClient", "build_search_client"]


def build_search_client(settings: SearchClientSettings) -> BaseSearchClient:
    """Create the (uninitialized) client selected by ``settings.backend``."""
    if settings.backend == "opensearch":
        return OpenSearchClient(
            hosts=settings.hosts,
            username=settings.username,
            password=settings.password,
            verify_certs=settings.verify_certs,
            timeout=settings.timeout,
            index_prefix=settings.index_prefix,
        )
    return HttpSearchClient(
        hosts=settings.hosts,
        username=settings.username,
        password=settings.password,
        api_key=settings.api_key,
        verify_certs=settings.verify_certs,
        timeout=settings.timeout,
        index_prefix=settings.index_prefix,
    )
