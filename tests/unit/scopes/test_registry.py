"""Tests for the scope registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from elastiscout.models.builder import CriteriaBuilder
from elastiscout.models.searchable import Searchable
from elastiscout.scopes.registry import ScopeExtension, ScopeRegistry
from tests.fakes import Comment, Post


@dataclass
class Article(Searchable):
    search_scopes = ("featured", "missing", "title")

    id: int
    title: str = ""

    @staticmethod
    def featured(builder: Any) -> None:
        builder.where("featured", True)


class TestBoot:
    def test_installs_declared_scopes(self) -> None:
        registry = ScopeRegistry()
        assert registry.boot(Post) == ["published", "by_author"]
        assert registry.installed(Post) == ["published", "by_author"]
        assert registry.is_booted(Post)

    def test_boot_twice_is_idempotent(self) -> None:
        registry = ScopeRegistry()
        registry.boot(Post)
        assert registry.boot(Post) == []
        assert registry.installed(Post) == ["published", "by_author"]

    def test_named_scopes_resolve_to_callables(self) -> None:
        registry = ScopeRegistry()
        assert registry.boot(Article) == ["featured"]
        builder = CriteriaBuilder(Article, scopes=registry).featured()
        assert builder.wheres == {"must": [{"term": {"featured": True}}]}

    def test_type_without_scopes(self) -> None:
        registry = ScopeRegistry()
        assert registry.boot(Comment) == []
        assert registry.is_booted(Comment)
        assert registry.installed(Comment) == []

    def test_scopes_are_per_record_type(self) -> None:
        registry = ScopeRegistry()
        registry.boot(Post)
        registry.boot(Comment)
        assert registry.resolve(Post, "published") is not None
        assert registry.resolve(Comment, "published") is None


class TestRegister:
    def test_same_name_registered_once(self) -> None:
        registry = ScopeRegistry()
        first = ScopeExtension("recent", lambda builder: None)
        second = ScopeExtension("recent", lambda builder: None)
        assert registry.register(Post, first)
        assert not registry.register(Post, second)
        assert registry.installed(Post) == ["recent"]
        assert registry.resolve(Post, "recent") is first

    def test_extension_receives_builder_and_args(self) -> None:
        calls: list[tuple[Any, ...]] = []
        extension = ScopeExtension("tagged", lambda builder, *tags: calls.append((builder, tags)))
        builder = CriteriaBuilder(Post)
        extension(builder, "solar", "wind")
        assert calls == [(builder, ("solar", "wind"))]


@dataclass
class Story(Searchable):
    search_scopes = ("published", "recent")

    id: int
    status: str = "draft"

    def published(self, builder: Any) -> None:
        builder.where("status", "published")

    def recent(self, builder: Any, days: int = 7) -> None:
        builder.where("published_at", ">=", f"now-{days}d")


class TestInstanceMethodScopes:
    def test_boot_installs_instance_methods(self) -> None:
        registry = ScopeRegistry()
        assert registry.boot(Story) == ["published", "recent"]

    def test_builder_is_passed_after_self(self) -> None:
        registry = ScopeRegistry()
        registry.boot(Story)

        builder = CriteriaBuilder(Story, scopes=registry).published().recent(days=30)

        assert builder.wheres == {
            "must": [
                {"term": {"status": "published"}},
                {"range": {"published_at": {"gte": "now-30d"}}},
            ]
        }
