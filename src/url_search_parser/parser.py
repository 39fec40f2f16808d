"""RequestParser — query string -> sort, filter, pagination, phrase."""

from __future__ import annotations

import hashlib
import json
import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .coercion import CoercionType, coerce
from .config import DEFAULT_CONFIG, ParserConfig
from .criteria import Filter, Sort
from .exceptions import InvalidParamError, QueryHashError
from .form import decode_form

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


class RequestParser:
    """Search request criteria decoded from a URL query string.

    The query is decoded once, at construction. The well-known
    parameters are extracted through ``get_query_param`` and stored via
    their setters, so the same validation applies whether a value comes
    from the query or is set later::

        parser = RequestParser("sort=-name&filter[status]=active&limit=10")
        parser.get_limit()           # 10
        parser.get_offset(0)         # 0 (absent, caller default)
        parser.get_sort().fields()   # ["name"]
        parser.get_query_param("limit", "int")  # 10

    Everything else stays in ``params`` and is read with
    ``get_query_param``.
    """

    def __init__(self, query: str, *, config: ParserConfig | None = None) -> None:
        """
        Decode ``query`` and extract the well-known parameters.

        Args:
            query: Query string without the leading ``?``.
            config: Identifiers, decoder limits and hash mode.

        Raises:
            InvalidParamError: If a pagination value is negative or the
                sort/filter expression is invalid.
            CoercionError: If a pagination value is a nested container or
                an out-of-range number.
        """
        self._config = config or DEFAULT_CONFIG
        self._query = query
        self._params: dict[str, Any] = decode_form(query, config=self._config)
        self._sort = Sort()
        self._filter = Filter()
        self._limit: int | None = None
        self._offset: int | None = None
        self._page: int | None = None
        self._phrase: str | None = None
        self._parse()

    def _parse(self) -> None:
        cfg = self._config
        self.set_sort(Sort(self.get_query_param(cfg.sort_key, CoercionType.STRING)))
        self.set_filter(
            Filter(self.get_query_param(cfg.filter_key, CoercionType.ARRAY, []))
        )
        self.set_limit(self.get_query_param(cfg.limit_key, CoercionType.INT))
        self.set_offset(self.get_query_param(cfg.offset_key, CoercionType.INT))
        self.set_page(self.get_query_param(cfg.page_key, CoercionType.INT))
        self.set_phrase(self.get_query_param(cfg.phrase_key, CoercionType.STRING))
        logger.debug(
            "Parsed %d query parameter(s): limit=%s offset=%s page=%s",
            len(self._params),
            self._limit,
            self._offset,
            self._page,
        )

    # -- Properties ----------------------------------------------------------

    @property
    def config(self) -> ParserConfig:
        return self._config

    @property
    def query(self) -> str:
        return self._query

    @property
    def params(self) -> Mapping[str, Any]:
        """Read-only view of the decoded parameters, in decode order."""
        return MappingProxyType(self._params)

    @property
    def sort(self) -> Sort:
        return self._sort

    @property
    def filter(self) -> Filter:
        return self._filter

    @property
    def limit(self) -> int | None:
        return self._limit

    @property
    def offset(self) -> int | None:
        return self._offset

    @property
    def page(self) -> int | None:
        return self._page

    @property
    def phrase(self) -> str | None:
        return self._phrase

    # -- Accessors -----------------------------------------------------------

    def get_query(self) -> str:
        return self._query

    def get_sort(self) -> Sort:
        return self._sort

    def get_filter(self) -> Filter:
        return self._filter

    def get_phrase(self) -> str | None:
        return self._phrase

    def get_limit(self, default: int | None = None) -> int | None:
        return self._limit if self._limit is not None else default

    def get_offset(self, default: int | None = None) -> int | None:
        return self._offset if self._offset is not None else default

    def get_page(self, default: int | None = None) -> int | None:
        return self._page if self._page is not None else default

    def get_query_param(
        self,
        name: str,
        type_name: str | CoercionType | None = None,
        default: Any = None,
    ) -> Any:
        """
        Return a decoded parameter, optionally coerced.

        Args:
            name: Parameter identifier.
            type_name: One of ``bool``/``boolean``, ``int``/``integer``,
                ``float``/``double``, ``string``, ``array`` (any case).
                ``None`` returns the stored value as is.
            default: Returned when ``name`` is absent.

        Raises:
            UnsupportedTypeError: If ``type_name`` is not recognised.
            CoercionError: If the value cannot be represented as the type.
        """
        if name not in self._params:
            return default
        value = self._params[name]
        if type_name is None:
            return value
        return coerce(value, type_name)

    # -- Mutators ------------------------------------------------------------

    def remove_query_param(self, name: str) -> RequestParser:
        """Drop ``name`` from ``params``; extracted fields are kept."""
        self._params.pop(name, None)
        return self

    def set_sort(self, sort: Sort) -> RequestParser:
        self._sort = sort
        return self

    def set_filter(self, filter: Filter) -> RequestParser:  # noqa: A002
        self._filter = filter
        return self

    def set_phrase(self, phrase: str | None) -> RequestParser:
        self._phrase = phrase
        return self

    def set_limit(self, limit: int | None) -> RequestParser:
        self._limit = _non_negative("limit", limit)
        return self

    def set_offset(self, offset: int | None) -> RequestParser:
        self._offset = _non_negative("offset", offset)
        return self

    def set_page(self, page: int | None) -> RequestParser:
        self._page = _non_negative("page", page)
        return self

    # -- Hashing -------------------------------------------------------------

    def get_query_hash(self) -> str:
        """
        MD5 hex digest of the decoded parameters serialized as JSON.

        Keys are serialized in decode order, so queries that differ only
        in pair order hash differently unless ``config.canonical_hash``
        is set. The canonical form sorts keys recursively and turns
        containers keyed exactly ``0..n-1``, in any order, into lists
        ordered by index.

        Raises:
            QueryHashError: If the parameters cannot be serialized.
        """
        try:
            data = self._params
            if self._config.canonical_hash:
                data = _canonical(data)
            payload = json.dumps(data, separators=(",", ":"))
            digest = hashlib.md5(
                payload.encode("utf-8"), usedforsecurity=False
            ).hexdigest()
        except (TypeError, ValueError) as e:
            raise QueryHashError(f"Cannot generate query hash. {e}") from e
        logger.debug("Query hash %s for %d parameter(s)", digest, len(self._params))
        return digest

    def __repr__(self) -> str:
        return f"RequestParser({self._query!r})"


def _non_negative(param: str, value: int | None) -> int | None:
    if value is not None and value < 0:
        raise InvalidParamError(
            param, f"{param.capitalize()} value cannot be lower than 0"
        )
    return value


def _canonical(value: Any) -> Any:
    if isinstance(value, dict):
        if value and set(value) == {str(i) for i in range(len(value))}:
            return [_canonical(value[str(i)]) for i in range(len(value))]
        return {key: _canonical(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [_canonical(item) for item in value]
    return value
