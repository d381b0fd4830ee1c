"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from elastiscout.config.settings import Settings
from tests.fakes import FakeRecordStore, Post


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def posts() -> list[Post]:
    return [
        Post(id=1, title="Solar nowcasting", author="ada"),
        Post(id=2, title="Wind forecasting", author="bob"),
        Post(id=3, title="Solar panels", author="ada"),
        Post(id=4, title="Hydro power", author="cy"),
        Post(id=5, title="Solar farms", author="bob"),
    ]


@pytest.fixture
def store(posts: list[Post]) -> FakeRecordStore:
    return FakeRecordStore(posts)
