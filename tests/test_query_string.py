"""Tests for QueryStringBuilder."""

from __future__ import annotations

import pytest

from url_search_parser import ParserConfig, QueryStringBuilder, RequestParser, Sort


def test_build_from_parser() -> None:
    parser = RequestParser(
        "sort=-name&filter[status]=active&limit=10&page=2&phrase=red+shoes&other=1"
    )
    assert QueryStringBuilder().build(parser) == (
        "sort=-name&filter[status][eq]=active&limit=10&page=2&phrase=red+shoes"
    )


def test_build_empty_parser() -> None:
    assert QueryStringBuilder().build(RequestParser("")) == ""


def test_build_overrides() -> None:
    parser = RequestParser("limit=10&page=2")
    query = QueryStringBuilder().build(parser, page=3, limit=None, sort=Sort("-id"))
    assert query == "sort=-id&page=3"


def test_build_unknown_override() -> None:
    with pytest.raises(TypeError):
        QueryStringBuilder().build(RequestParser(""), cursor="abc")


def test_build_round_trip() -> None:
    parser = RequestParser(
        "sort=-name,age&filter[age][gte]=18&filter[id][in]=1,2&offset=20&phrase=a+b"
    )
    rebuilt = RequestParser(QueryStringBuilder().build(parser))
    assert rebuilt.get_sort() == parser.get_sort()
    assert rebuilt.get_filter() == parser.get_filter()
    assert rebuilt.get_offset() == 20
    assert rebuilt.get_phrase() == "a b"


def test_build_round_trip_repeated_filter_operator() -> None:
    parser = RequestParser("filter=tag:neq:a,tag:neq:b,id:in:1,2,id:in:3")
    query = QueryStringBuilder().build(parser)
    assert query == (
        "filter[tag][neq][0]=a&filter[tag][neq][1]=b"
        "&filter[id][in][0][0]=1&filter[id][in][0][1]=2&filter[id][in][1][0]=3"
    )
    rebuilt = RequestParser(query)
    assert rebuilt.get_filter() == parser.get_filter()
    assert len(rebuilt.get_filter()) == 4


def test_build_uses_configured_identifiers() -> None:
    config = ParserConfig(limit_key="per_page", page_key="p")
    parser = RequestParser("per_page=5&p=2", config=config)
    assert QueryStringBuilder().build(parser, page=3) == "per_page=5&p=3"
