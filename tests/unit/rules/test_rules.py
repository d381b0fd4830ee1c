"""Tests for search rules."""

from __future__ import annotations

from typing import Any

import pytest

from elastiscout.models.criteria import SearchCriteria
from elastiscout.rules import CallableRule, QueryStringRule, SearchRule, resolve_rule
from tests.fakes import Post


class TitleRule(SearchRule):
    def build_query_payload(self) -> dict[str, Any]:
        return {"must": {"match": {"title": self.criteria.query}}}

    def build_highlight_payload(self) -> dict[str, Any] | None:
        return {"fields": {"title": {}}}


@pytest.fixture
def criteria() -> SearchCriteria:
    return SearchCriteria(record_type=Post, query="solar")


class TestQueryStringRule:
    def test_query_payload(self, criteria: SearchCriteria) -> None:
        rule = QueryStringRule(criteria)
        assert rule.is_applicable()
        assert rule.build_query_payload() == {"must": {"query_string": {"query": "solar"}}}
        assert rule.build_highlight_payload() is None


class TestCallableRule:
    def test_always_applicable_by_default(self, criteria: SearchCriteria) -> None:
        rule = CallableRule(lambda c: {"must": {"term": {"title": c.query}}}, criteria)
        assert rule.is_applicable()
        assert rule.build_query_payload() == {"must": {"term": {"title": "solar"}}}
        assert rule.build_highlight_payload() is None

    def test_predicate(self, criteria: SearchCriteria) -> None:
        rule = CallableRule(lambda c: {}, criteria, applies=lambda c: c.query == "wind")
        assert not rule.is_applicable()

    def test_none_result_becomes_empty(self, criteria: SearchCriteria) -> None:
        assert CallableRule(lambda c: None, criteria).build_query_payload() == {}


class TestResolveRule:
    def test_class_is_instantiated(self, criteria: SearchCriteria) -> None:
        rule = resolve_rule(TitleRule, criteria)
        assert isinstance(rule, TitleRule)
        assert rule.criteria is criteria

    def test_instance_is_bound(self, criteria: SearchCriteria) -> None:
        declared = TitleRule()
        assert resolve_rule(declared, criteria).criteria is criteria

    def test_declared_instance_is_not_mutated(self, criteria: SearchCriteria) -> None:
        declared = TitleRule()
        bound = resolve_rule(declared, criteria)
        assert bound is not declared
        assert declared.criteria is None

    def test_function_is_wrapped(self, criteria: SearchCriteria) -> None:
        rule = resolve_rule(lambda c: {"must": {}}, criteria)
        assert isinstance(rule, CallableRule)

    def test_unsupported_rule(self, criteria: SearchCriteria) -> None:
        with pytest.raises(TypeError):
            resolve_rule("title", criteria)
