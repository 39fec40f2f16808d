"""Tests for decode_form / encode_form."""

from __future__ import annotations

import logging

import pytest

from url_search_parser.config import ParserConfig
from url_search_parser.form import decode_form, encode_form, split_key

# -- Plain pairs -------------------------------------------------------------


def test_decode_plain_pairs_keep_order() -> None:
    params = decode_form("b=2&a=1&c=3")
    assert params == {"b": "2", "a": "1", "c": "3"}
    assert list(params) == ["b", "a", "c"]


def test_decode_empty_query() -> None:
    assert decode_form("") == {}


def test_decode_skips_empty_chunks() -> None:
    assert decode_form("&&a=1&") == {"a": "1"}


def test_decode_pair_without_equals_is_blank() -> None:
    assert decode_form("flag&a=1") == {"flag": "", "a": "1"}


def test_decode_value_keeps_later_equals() -> None:
    assert decode_form("expr=a=b") == {"expr": "a=b"}


def test_decode_drops_empty_key() -> None:
    assert decode_form("=x&a=1") == {"a": "1"}


def test_decode_percent_and_plus() -> None:
    assert decode_form("phrase=hello+world%21") == {"phrase": "hello world!"}


def test_decode_last_value_wins_in_place() -> None:
    params = decode_form("a=1&b=2&a=3")
    assert params == {"a": "3", "b": "2"}
    assert list(params) == ["a", "b"]


def test_decode_mangles_base_name() -> None:
    params = decode_form("first.name=x&last+name=y&+lead=z")
    assert params == {"first_name": "x", "last_name": "y", "lead": "z"}


# -- Bracket nesting ---------------------------------------------------------


def test_decode_nested_mapping() -> None:
    params = decode_form("filter[status]=active&filter[age][gte]=18")
    assert params == {"filter": {"status": "active", "age": {"gte": "18"}}}


def test_decode_encoded_brackets() -> None:
    assert decode_form("filter%5Bstatus%5D=active") == {
        "filter": {"status": "active"}
    }


def test_decode_implicit_indices_become_list() -> None:
    assert decode_form("tags[]=x&tags[]=y") == {"tags": ["x", "y"]}


def test_decode_explicit_sequential_indices_become_list() -> None:
    assert decode_form("a[0]=x&a[1]=y") == {"a": ["x", "y"]}


def test_decode_sparse_indices_stay_mapping() -> None:
    assert decode_form("a[1]=x") == {"a": {"1": "x"}}


def test_decode_push_after_explicit_index() -> None:
    assert decode_form("a[5]=x&a[]=y") == {"a": {"5": "x", "6": "y"}}


def test_decode_mixed_keys_stay_mapping() -> None:
    assert decode_form("a[]=x&a[key]=y") == {"a": {"0": "x", "key": "y"}}


def test_decode_nested_lists() -> None:
    assert decode_form("m[a][]=1&m[a][]=2&m[b]=3") == {
        "m": {"a": ["1", "2"], "b": "3"}
    }


def test_decode_scalar_replaced_by_container() -> None:
    assert decode_form("a=1&a[b]=2") == {"a": {"b": "2"}}


def test_decode_container_replaced_by_scalar() -> None:
    assert decode_form("a[]=1&a=2") == {"a": "2"}


def test_decode_unclosed_bracket_is_part_of_name() -> None:
    assert decode_form("a[b=1") == {"a_b": "1"}


def test_decode_unclosed_nested_bracket_is_ignored() -> None:
    assert decode_form("a[b][c=1") == {"a": {"b": "1"}}


def test_decode_ignores_text_after_last_bracket() -> None:
    assert decode_form("a[b]c=1") == {"a": {"b": "1"}}


def test_split_key() -> None:
    assert split_key("  a") == ("a", [])
    assert split_key("a[]") == ("a", [None])
    assert split_key("a[x][]") == ("a", ["x", None])
    assert split_key("[x]") is None
    assert split_key(" ") is None


# -- Limits ------------------------------------------------------------------


def test_decode_max_input_vars(caplog: pytest.LogCaptureFixture) -> None:
    config = ParserConfig(max_input_vars=2)
    with caplog.at_level(logging.WARNING, logger="url_search_parser.form"):
        params = decode_form("a=1&b=2&c=3", config=config)
    assert params == {"a": "1", "b": "2"}
    assert "exceeded" in caplog.text


def test_decode_max_nesting_level_drops_variable(
    caplog: pytest.LogCaptureFixture,
) -> None:
    config = ParserConfig(max_nesting_level=2)
    with caplog.at_level(logging.WARNING, logger="url_search_parser.form"):
        params = decode_form("a[x]=1&a[b][c][d]=2&z=3", config=config)
    assert params == {"z": "3"}
    assert "nesting level" in caplog.text


def test_decode_custom_separator() -> None:
    config = ParserConfig(separator=";")
    assert decode_form("a=1;b=2", config=config) == {"a": "1", "b": "2"}


# -- Encoding ----------------------------------------------------------------


def test_encode_nested() -> None:
    params = {"a": "1", "filter": {"status": "active"}, "tags": ["x", "y"]}
    assert encode_form(params) == (
        "a=1&filter[status]=active&tags[0]=x&tags[1]=y"
    )


def test_encode_quotes_values() -> None:
    assert encode_form({"phrase": "hello world&more"}) == (
        "phrase=hello+world%26more"
    )


def test_encode_skips_none_and_writes_bools() -> None:
    assert encode_form({"a": True, "b": None, "c": 3, "d": False}) == "a=1&c=3&d=0"


def test_decode_encode_round_trip() -> None:
    query = (
        "sort=-name&filter[status]=active&filter[age][gte]=18"
        "&tags[]=a&tags[]=b&phrase=big+cats%2Fdogs"
    )
    decoded = decode_form(query)
    assert decode_form(encode_form(decoded)) == decoded
