"""Parser configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ParserConfig:
    """Request parser configuration.

    Attributes:
        separator: Separator between ``key=value`` pairs.
        max_input_vars: Maximum number of pairs decoded from one query.
        max_nesting_level: Maximum bracket depth of a single key.
        canonical_hash: Sort keys recursively before hashing, so that
            queries differing only in pair order share a hash.
        sort_key: Identifier of the sort parameter.
        filter_key: Identifier of the filter parameter.
        limit_key: Identifier of the limit parameter.
        offset_key: Identifier of the offset parameter.
        page_key: Identifier of the page parameter.
        phrase_key: Identifier of the phrase parameter.
    """

    separator: str = "&"
    max_input_vars: int = 1000
    max_nesting_level: int = 64
    canonical_hash: bool = False

    sort_key: str = "sort"
    filter_key: str = "filter"
    limit_key: str = "limit"
    offset_key: str = "offset"
    page_key: str = "page"
    phrase_key: str = "phrase"

    def __post_init__(self) -> None:
        if not self.separator:
            raise ValueError("separator must not be empty")
        if self.max_input_vars < 1:
            raise ValueError("max_input_vars must be a positive integer")
        if self.max_nesting_level < 1:
            raise ValueError("max_nesting_level must be a positive integer")


DEFAULT_CONFIG = ParserConfig()
