"""Sort and filter criteria value objects."""

from __future__ import annotations

from .filter import Filter, FilterOperator, FilterParam
from .sort import Sort, SortDirection, SortParam
from .value_object import Criteria, CriteriaParam, ValueObject

__all__ = [
    "Criteria",
    "CriteriaParam",
    "Filter",
    "FilterOperator",
    "FilterParam",
    "Sort",
    "SortDirection",
    "SortParam",
    "ValueObject",
]
