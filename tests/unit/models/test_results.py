"""Tests for hit and result models."""

from __future__ import annotations

from elastiscout.models.results import Highlight, Hit, SearchResults
from tests.fakes import es_response


class TestHit:
    def test_parses_engine_keys(self) -> None:
        hit = Hit.model_validate({"_id": "posts_42", "_score": 1.5, "_source": {"title": "x"}})
        assert hit.id == "posts_42"
        assert hit.score == 1.5
        assert hit.source == {"title": "x"}
        assert hit.highlight is None

    def test_parses_plain_keys(self) -> None:
        hit = Hit.model_validate({"id": "posts_7", "score": 2.0, "source": {}, "highlight": {"title": ["<em>x</em>"]}})
        assert hit.id == "posts_7"
        assert hit.highlight == {"title": ["<em>x</em>"]}

    def test_persisted_key(self) -> None:
        assert Hit(id="posts_42").persisted_key() == "42"

    def test_persisted_key_uses_last_segment(self) -> None:
        assert Hit(id="blog_posts_42").persisted_key() == "42"

    def test_persisted_key_custom_delimiter(self) -> None:
        assert Hit(id="posts:42").persisted_key(":") == "42"

    def test_persisted_key_without_prefix(self) -> None:
        assert Hit(id="42").persisted_key() == "42"


class TestSearchResults:
    def test_total_from_object(self) -> None:
        assert SearchResults(response=es_response([1, 2], total=7)).total == 7

    def test_total_from_legacy_integer(self) -> None:
        assert SearchResults(response={"hits": {"total": 3, "hits": []}}).total == 3

    def test_total_of_empty_response(self) -> None:
        assert SearchResults().total == 0

    def test_hits_in_order(self) -> None:
        results = SearchResults(response=es_response([3, 1, 2]))
        assert [hit.id for hit in results.hits] == ["posts_3", "posts_1", "posts_2"]

    def test_selected_columns(self) -> None:
        results = SearchResults(payload={"index": "posts", "body": {"_source": ["title"]}})
        assert results.selected_columns == ["title"]

    def test_selected_columns_absent(self) -> None:
        assert SearchResults(payload={"index": "posts", "body": {}}).selected_columns is None
        assert SearchResults().selected_columns is None


class TestHighlight:
    def test_accessors(self) -> None:
        highlight = Highlight(fragments={"title": ["<em>solar</em>", "panels"]})
        assert highlight.get("title") == ["<em>solar</em>", "panels"]
        assert highlight.as_string("title") == "<em>solar</em> panels"
        assert "title" in highlight
        assert highlight.get("body") == []
        assert highlight.as_string("body") == ""
