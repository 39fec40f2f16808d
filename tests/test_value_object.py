"""Tests for the shared criteria value-object bases."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from url_search_parser.criteria import (
    Criteria,
    CriteriaParam,
    Filter,
    FilterParam,
    Sort,
    SortParam,
)


class TagParam(CriteriaParam):
    weight: int = 1


class Tags(Criteria[TagParam]):
    pass


def test_criteria_surface() -> None:
    tags = Tags(params=(TagParam(field="a"), TagParam(field="b"), TagParam(field="a")))
    assert len(tags) == 3
    assert tags
    assert not tags.is_empty()
    assert [tag.field for tag in tags] == ["a", "b", "a"]
    assert tags.fields() == ["a", "b"]


def test_empty_criteria() -> None:
    tags = Tags()
    assert len(tags) == 0
    assert not tags
    assert tags.is_empty()
    assert tags.fields() == []


def test_criteria_validates_param_type() -> None:
    with pytest.raises(ValidationError):
        Tags(params=({"weight": 2},))


def test_sort_and_filter_share_base() -> None:
    assert isinstance(Sort("a"), Criteria)
    assert isinstance(Filter({"a": "1"}), Criteria)
    assert issubclass(SortParam, CriteriaParam)
    assert issubclass(FilterParam, CriteriaParam)


def test_equality_is_per_class() -> None:
    assert Tags(params=(TagParam(field="a"),)) == Tags(params=(TagParam(field="a"),))
    assert Tags(params=(TagParam(field="a"),)) != Sort("a")
    assert hash(Tags(params=(TagParam(field="a"),))) == hash(
        Tags(params=(TagParam(field="a"),))
    )
