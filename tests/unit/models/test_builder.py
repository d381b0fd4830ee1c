"""Tests for the criteria builder and criteria model."""

from __future__ import annotations

import pydantic
import pytest

from elastiscout.exceptions import ScopeNotFoundError
from elastiscout.models.builder import CriteriaBuilder
from elastiscout.models.criteria import FilterOperator
from elastiscout.scopes.registry import ScopeRegistry
from tests.fakes import Post


class TestWhere:
    def test_equality_shorthand(self) -> None:
        builder = CriteriaBuilder(Post).where("author", "ada")
        assert builder.wheres == {"must": [{"term": {"author": "ada"}}]}

    @pytest.mark.parametrize(
        ("operator", "key"),
        [(">", "gt"), ("<", "lt"), (">=", "gte"), ("<=", "lte")],
    )
    def test_range_operators(self, operator: str, key: str) -> None:
        builder = CriteriaBuilder(Post).where("views", operator, 10)
        assert builder.wheres == {"must": [{"range": {"views": {key: 10}}}]}

    @pytest.mark.parametrize("operator", ["!=", "<>"])
    def test_not_equal_goes_to_must_not(self, operator: str) -> None:
        builder = CriteriaBuilder(Post).where("author", operator, "bob")
        assert builder.wheres == {"must_not": [{"term": {"author": "bob"}}]}

    def test_unknown_operator(self) -> None:
        with pytest.raises(ValueError, match="Unsupported"):
            CriteriaBuilder(Post).where("views", "~", 1)

    def test_or_where(self) -> None:
        builder = CriteriaBuilder(Post).or_where("author", "ada").or_where("author", "<>", "bob")
        assert builder.wheres == {
            "should": [
                {"term": {"author": "ada"}},
                {"bool": {"must_not": {"term": {"author": "bob"}}}},
            ]
        }

    def test_clause_helpers(self) -> None:
        builder = (
            CriteriaBuilder(Post)
            .where_in("id", [1, 2])
            .where_not_in("id", [3])
            .where_between("views", 1, 5)
            .where_exists("title")
            .where_not_exists("deleted_at")
        )
        assert builder.wheres["must"] == [
            {"terms": {"id": [1, 2]}},
            {"range": {"views": {"gte": 1, "lte": 5}}},
            {"exists": {"field": "title"}},
        ]
        assert builder.wheres["must_not"] == [
            {"terms": {"id": [3]}},
            {"exists": {"field": "deleted_at"}},
        ]

    @pytest.mark.parametrize("operator", [FilterOperator.OR, "should", "or", "OR"])
    def test_raw_filter_operator_forms(self, operator: FilterOperator | str) -> None:
        builder = CriteriaBuilder(Post).filter(operator, {"term": {"a": 1}})
        assert builder.wheres == {"should": [{"term": {"a": 1}}]}

    def test_raw_filter_unknown_operator(self) -> None:
        with pytest.raises(ValueError):
            CriteriaBuilder(Post).filter("xor", {})


class TestToCriteria:
    def test_snapshot(self) -> None:
        criteria = (
            CriteriaBuilder(Post, "solar")
            .select("title")
            .collapse("author")
            .order_by("published_at", "DESC")
            .skip(20)
            .take(10)
            .aggregate("authors", {"terms": {"field": "author"}})
            .minimum_should_match(1)
            .to_criteria()
        )
        assert criteria.query == "solar"
        assert criteria.select == ["title"]
        assert criteria.collapse == "author"
        assert criteria.orders == [{"published_at": "desc"}]
        assert (criteria.offset, criteria.limit) == (20, 10)
        assert criteria.aggregations == {"authors": {"terms": {"field": "author"}}}
        assert criteria.minimum_should_match == 1
        assert criteria.is_text_search

    def test_criteria_is_frozen(self) -> None:
        criteria = CriteriaBuilder(Post).to_criteria()
        with pytest.raises(pydantic.ValidationError):
            criteria.query = "changed"  # type: ignore[misc]

    def test_builder_changes_do_not_leak(self) -> None:
        builder = CriteriaBuilder(Post).where("author", "ada")
        criteria = builder.to_criteria()
        builder.where("author", "bob")
        assert criteria.wheres == {"must": [{"term": {"author": "ada"}}]}

    def test_paginated(self) -> None:
        criteria = CriteriaBuilder(Post, "solar").to_criteria().paginated(per_page=15, page=3)
        assert (criteria.offset, criteria.limit) == (30, 15)

    @pytest.mark.parametrize(("per_page", "page"), [(10, 0), (10, -1), (-5, 2)])
    def test_paginated_rejects_out_of_range(self, per_page: int, page: int) -> None:
        criteria = CriteriaBuilder(Post, "solar").to_criteria()
        with pytest.raises(ValueError):
            criteria.paginated(per_page=per_page, page=page)

    def test_filter_only(self) -> None:
        assert not CriteriaBuilder(Post).to_criteria().is_text_search


class TestScopes:
    @pytest.fixture
    def registry(self) -> ScopeRegistry:
        registry = ScopeRegistry()
        registry.boot(Post)
        return registry

    def test_scope_by_attribute(self, registry: ScopeRegistry) -> None:
        builder = CriteriaBuilder(Post, scopes=registry).published().by_author("ada")
        assert builder.wheres == {"must": [{"term": {"published": True}}, {"term": {"author": "ada"}}]}

    def test_scope_by_name(self, registry: ScopeRegistry) -> None:
        builder = CriteriaBuilder(Post, scopes=registry).scope("by_author", author="bob")
        assert builder.wheres == {"must": [{"term": {"author": "bob"}}]}

    def test_unknown_scope(self, registry: ScopeRegistry) -> None:
        builder = CriteriaBuilder(Post, scopes=registry)
        with pytest.raises(ScopeNotFoundError):
            builder.archived()
        assert not hasattr(builder, "archived")

    def test_no_registry(self) -> None:
        with pytest.raises(AttributeError):
            CriteriaBuilder(Post).published()
