"""Sort — comma-separated sort expression, ``-`` prefix for descending."""

from __future__ import annotations

from enum import Enum
from typing import Any

from ..exceptions import InvalidParamError
from .value_object import Criteria, CriteriaParam

_PARAM = "sort"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SortParam(CriteriaParam):
    """One sorted field."""

    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC

    def to_query_value(self) -> str:
        return f"-{self.field}" if self.descending else self.field


class Sort(Criteria[SortParam]):
    """Parsed sort expression such as ``-created_at,name``.

    ``Sort()`` and ``Sort("")`` are empty. Parts are stripped and blank
    parts skipped; ``+`` or no prefix sorts ascending.

    Raises:
        InvalidParamError: If a part has no field name or a field repeats.
    """

    def __init__(self, raw: str | None = None, /, **data: Any) -> None:
        if "params" not in data:
            data["params"] = _parse_sort(raw)
        super().__init__(**data)

    def get(self, field: str) -> SortParam | None:
        for param in self.params:
            if param.field == field:
                return param
        return None

    def to_query_value(self) -> str:
        """Inverse of parsing, e.g. ``-created_at,name``."""
        return ",".join(param.to_query_value() for param in self.params)

    def to_order_by(self) -> list[str]:
        """Ordering list in ``["-created_at", "name"]`` form."""
        return [param.to_query_value() for param in self.params]


def _parse_sort(raw: str | None) -> tuple[SortParam, ...]:
    if not raw:
        return ()
    params: list[SortParam] = []
    seen: set[str] = set()
    for part in raw.split(","):
        token = part.strip()
        if not token:
            continue
        direction = SortDirection.ASC
        if token[0] in "+-":
            if token[0] == "-":
                direction = SortDirection.DESC
            token = token[1:].strip()
        if not token:
            raise InvalidParamError(
                _PARAM, f"Sort field name is missing in {part.strip()!r}"
            )
        if token in seen:
            raise InvalidParamError(_PARAM, f"Sort field {token!r} is duplicated")
        seen.add(token)
        params.append(SortParam(field=token, direction=direction))
    return tuple(params)
