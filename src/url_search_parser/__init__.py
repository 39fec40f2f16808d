"""URL query string parsing — sort, filter, pagination, typed params, query hash."""

from __future__ import annotations

from .coercion import CoercionType, coerce
from .config import ParserConfig
from .criteria import (
    Filter,
    FilterOperator,
    FilterParam,
    Sort,
    SortDirection,
    SortParam,
)
from .exceptions import (
    CoercionError,
    InvalidParamError,
    QueryHashError,
    UnsupportedTypeError,
    UrlSearchParserError,
)
from .form import decode_form, encode_form
from .parser import RequestParser
from .query_string import QueryStringBuilder

__all__ = [
    "CoercionError",
    "CoercionType",
    "Filter",
    "FilterOperator",
    "FilterParam",
    "InvalidParamError",
    "ParserConfig",
    "QueryHashError",
    "QueryStringBuilder",
    "RequestParser",
    "Sort",
    "SortDirection",
    "SortParam",
    "UnsupportedTypeError",
    "UrlSearchParserError",
    "coerce",
    "decode_form",
    "encode_form",
]
