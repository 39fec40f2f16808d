"""Shared fixtures for url-search-parser tests."""

from __future__ import annotations

import pytest

from url_search_parser import RequestParser

EXAMPLE_QUERY = "sort=-name&filter[status]=active&limit=10&page=2"


@pytest.fixture
def example_query() -> str:
    return EXAMPLE_QUERY


@pytest.fixture
def parser() -> RequestParser:
    """Parser built from a typical listing request."""
    return RequestParser(EXAMPLE_QUERY)
