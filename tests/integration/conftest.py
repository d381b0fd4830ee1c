"""Integration test fixtures — a live Elasticsearch-compatible cluster with seed posts.

Expects a single-node cluster on localhost:9200, e.g.:
    docker run -d -p 9200:9200 -e discovery.type=single-node -e xpack.security.enabled=false \
        docker.elastic.co/elasticsearch/elasticsearch:8.13.0

The ``posts`` index is recreated and seeded on first use.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx
import pytest

from tests.fakes import Post

SEED_POSTS: list[dict[str, Any]] = [
    {"id": 1, "title": "Advances in solar nowcasting", "author": "ada", "published": True},
    {"id": 2, "title": "Wind farm forecasting", "author": "bob", "published": True},
    {"id": 3, "title": "Solar panel degradation", "author": "ada", "published": False},
    {"id": 4, "title": "Hydro power scheduling", "author": "cy", "published": True},
    {"id": 5, "title": "Solar farms at scale", "author": "bob", "published": True},
]


def _wait_for_service(url: str, timeout: float = 10.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=5)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(1)
    return False


async def _seed_posts(host: str, index: str = "posts") -> None:
    async with httpx.AsyncClient(base_url=host, timeout=30) as client:
        await client.delete(f"/{index}", params={"ignore_unavailable": "true"})

        mapping = {
            "mappings": {
                "properties": {
                    "title": {"type": "text"},
                    "author": {"type": "keyword"},
                    "published": {"type": "boolean"},
                }
            }
        }
        resp = await client.put(f"/{index}", json=mapping)
        resp.raise_for_status()

        for doc in SEED_POSTS:
            resp = await client.put(f"/{index}/_doc/{index}_{doc['id']}", json=doc)
            resp.raise_for_status()

        await client.post(f"/{index}/_refresh")


@pytest.fixture(scope="session")
def elasticsearch_ready() -> str:
    """Ensure the cluster is running and seeded."""
    host = "http://localhost:9200"
    if not _wait_for_service(host):
        pytest.skip("Elasticsearch not available at localhost:9200")
    asyncio.run(_seed_posts(host))
    return host


@pytest.fixture
def seed_records() -> list[Post]:
    return [Post(id=d["id"], title=d["title"], author=d["author"]) for d in SEED_POSTS]
