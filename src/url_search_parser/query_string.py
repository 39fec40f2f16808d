"""QueryStringBuilder — parser state -> query string (pagination links)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .criteria import Filter, Sort
from .form import encode_form

if TYPE_CHECKING:
    from .config import ParserConfig
    from .parser import RequestParser


class QueryStringBuilder:
    """Build a query string from a parser's current criteria."""

    def __init__(self, config: ParserConfig | None = None) -> None:
        self._config = config

    def build(self, parser: RequestParser, **overrides: Any) -> str:
        """
        Produce a query string from ``parser``'s sort, filter, pagination
        and phrase.

        Keyword overrides use the field names (``limit``, ``offset``,
        ``page``, ``phrase``, ``sort``, ``filter``) and replace the
        parser's value; an override of ``None`` drops the field::

            builder.build(parser, page=parser.get_page(1) + 1)
        """
        cfg = self._config or parser.config
        values: dict[str, Any] = {
            "sort": parser.get_sort().to_query_value() or None,
            "filter": parser.get_filter().to_query_params() or None,
            "limit": parser.get_limit(),
            "offset": parser.get_offset(),
            "page": parser.get_page(),
            "phrase": parser.get_phrase(),
        }
        unknown = set(overrides) - set(values)
        if unknown:
            raise TypeError(f"Unknown query field(s): {', '.join(sorted(unknown))}")
        values.update(overrides)
        if isinstance(values["sort"], Sort):
            values["sort"] = values["sort"].to_query_value() or None
        if isinstance(values["filter"], Filter):
            values["filter"] = values["filter"].to_query_params() or None

        keys = {
            "sort": cfg.sort_key,
            "filter": cfg.filter_key,
            "limit": cfg.limit_key,
            "offset": cfg.offset_key,
            "page": cfg.page_key,
            "phrase": cfg.phrase_key,
        }
        params = {
            keys[name]: value for name, value in values.items() if value is not None
        }
        return encode_form(params)
