"""Filter — field/operator/value conditions from a decoded ``filter`` param.

Two input shapes are accepted:

- bracket form, decoded to a mapping::

    filter[status]=active                 -> status eq active
    filter[age][gte]=18&filter[age][lt]=65 -> age gte 18, age lt 65
    filter[tag][]=a&filter[tag][]=b       -> tag in (a, b)

- colon form, decoded to a sequence of clauses::

    filter=status:active,age:gte:18,id:in:1,2,3
"""

from __future__ import annotations

from collections.abc import Mapping
from difflib import get_close_matches
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..exceptions import InvalidParamError
from .value_object import Criteria, CriteriaParam

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

_PARAM = "filter"


class FilterOperator(str, Enum):
    """Supported filter operators."""

    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    LIKE = "like"
    IN = "in"
    NOTIN = "notin"
    NULL = "null"
    NOTNULL = "notnull"

    @classmethod
    def from_token(cls, token: str) -> FilterOperator:
        """Resolve an operator name or alias, case-insensitively."""
        normalized = token.strip().lower()
        operator = _OP_ALIASES.get(normalized)
        if operator is None:
            valid = [op.value for op in cls]
            suggestions = get_close_matches(normalized, list(_OP_ALIASES), n=3)
            message = f"Unknown filter operator {token!r}."
            if suggestions:
                message += f" Did you mean: {', '.join(suggestions)}?"
            message += f" Valid operators: {', '.join(valid)}"
            raise InvalidParamError(_PARAM, message)
        return operator


_OP_ALIASES: dict[str, FilterOperator] = {
    **{op.value: op for op in FilterOperator},
    "=": FilterOperator.EQ,
    "ne": FilterOperator.NEQ,
    "!=": FilterOperator.NEQ,
    ">": FilterOperator.GT,
    ">=": FilterOperator.GTE,
    "<": FilterOperator.LT,
    "<=": FilterOperator.LTE,
    "not_in": FilterOperator.NOTIN,
    "is_null": FilterOperator.NULL,
    "is_not_null": FilterOperator.NOTNULL,
    "not_null": FilterOperator.NOTNULL,
}

_SET_OPERATORS = frozenset({FilterOperator.IN, FilterOperator.NOTIN})
_NULL_OPERATORS = frozenset({FilterOperator.NULL, FilterOperator.NOTNULL})


class FilterParam(CriteriaParam):
    """One filter condition.

    ``value`` is a tuple for ``in``/``notin``, ``None`` for
    ``null``/``notnull`` and a string otherwise.
    """

    operator: FilterOperator = FilterOperator.EQ
    value: str | tuple[str, ...] | None = None

    def to_query_value(self) -> str:
        if self.value is None:
            return ""
        if isinstance(self.value, tuple):
            return ",".join(self.value)
        return self.value


class Filter(Criteria[FilterParam]):
    """Parsed filter conditions, in input order.

    ``Filter()``, ``Filter([])`` and ``Filter({})`` are empty.

    Raises:
        InvalidParamError: On unknown operators, missing field names or
            values of the wrong shape.
    """

    def __init__(
        self,
        raw: Mapping[str, Any] | list[Any] | tuple[Any, ...] | str | None = None,
        /,
        **data: Any,
    ) -> None:
        if "params" not in data:
            data["params"] = _parse_filter(raw)
        super().__init__(**data)

    def get(self, field: str) -> tuple[FilterParam, ...]:
        """All conditions on ``field``."""
        return tuple(param for param in self.params if param.field == field)

    def to_query_params(self) -> dict[str, dict[str, Any]]:
        """Bracket-form mapping, e.g. ``{"age": {"gte": "18"}}``.

        A field/operator pair that occurs more than once maps to a list
        with one item per condition, e.g. ``{"tag": {"neq": ["a", "b"]}}``.
        Repeated ``in``/``notin`` conditions map to a list of value lists.
        """
        grouped: dict[str, dict[str, list[FilterParam]]] = {}
        for param in self.params:
            grouped.setdefault(param.field, {}).setdefault(
                param.operator.value, []
            ).append(param)

        out: dict[str, dict[str, Any]] = {}
        for field, operators in grouped.items():
            out[field] = {}
            for op, params in operators.items():
                if len(params) == 1:
                    out[field][op] = params[0].to_query_value()
                elif params[0].operator in _SET_OPERATORS:
                    out[field][op] = [list(param.value or ()) for param in params]
                else:
                    out[field][op] = [param.to_query_value() for param in params]
        return out


def _parse_filter(raw: Any) -> tuple[FilterParam, ...]:
    if not raw:
        return ()
    if isinstance(raw, Mapping):
        return tuple(_from_mapping(raw))
    if isinstance(raw, (list, tuple)):
        return tuple(_from_sequence(raw))
    if isinstance(raw, str):
        return tuple(_from_sequence(raw.split(",")))
    raise InvalidParamError(_PARAM, f"Unsupported filter value {raw!r}")


def _from_mapping(raw: Mapping[str, Any]) -> Iterator[FilterParam]:
    for field, condition in raw.items():
        if isinstance(condition, Mapping):
            if not condition:
                raise InvalidParamError(
                    _PARAM, f"Filter on {field!r} has no operator"
                )
            for op_token, value in condition.items():
                for item in _repeated(str(op_token), value):
                    yield _build(str(field), str(op_token), item)
        elif isinstance(condition, (list, tuple)):
            yield _build(str(field), FilterOperator.IN.value, condition)
        else:
            yield _build(str(field), FilterOperator.EQ.value, condition)


def _repeated(op_token: str, value: Any) -> list[Any]:
    # A list under one operator holds one value per condition; in/notin
    # repeat only when every item is itself a list of values.
    if not isinstance(value, (list, tuple)) or not value:
        return [value]
    if FilterOperator.from_token(op_token) in _SET_OPERATORS:
        if all(isinstance(item, (list, tuple)) for item in value):
            return list(value)
        return [value]
    return list(value)


def _from_sequence(items: Iterable[Any]) -> Iterator[FilterParam]:
    # Pieces without a colon continue the previous clause's value
    # ("id:in:1,2,3" arrives split on commas).
    entries: list[str | Mapping[str, Any]] = []
    for item in items:
        if isinstance(item, Mapping):
            entries.append(item)
            continue
        if not isinstance(item, str):
            raise InvalidParamError(_PARAM, f"Unsupported filter clause {item!r}")
        text = item.strip()
        if not text:
            continue
        last = entries[-1] if entries else None
        if ":" not in text and isinstance(last, str):
            entries[-1] = f"{last},{text}"
        else:
            entries.append(text)

    for entry in entries:
        if isinstance(entry, str):
            yield _parse_clause(entry)
        else:
            yield from _from_mapping(entry)


def _parse_clause(clause: str) -> FilterParam:
    tokens = clause.split(":", 2)
    if len(tokens) == 2:
        return _build(tokens[0], FilterOperator.EQ.value, tokens[1])
    if len(tokens) == 3:
        return _build(tokens[0], tokens[1], tokens[2])
    raise InvalidParamError(
        _PARAM, f"Expected field:op:value or field:value, got: {clause!r}"
    )


def _build(field: str, op_token: str, value: Any) -> FilterParam:
    field = field.strip()
    if not field:
        raise InvalidParamError(_PARAM, "Filter field name is missing")
    operator = FilterOperator.from_token(op_token)

    if operator in _NULL_OPERATORS:
        return FilterParam(field=field, operator=operator)

    if operator in _SET_OPERATORS:
        if isinstance(value, str):
            values: list[Any] = value.split(",")
        elif isinstance(value, Mapping):
            values = list(value.values())
        elif isinstance(value, (list, tuple)):
            values = list(value)
        else:
            values = [value]
        if not all(isinstance(item, str) for item in values):
            raise InvalidParamError(
                _PARAM, f"Filter {field}[{operator.value}] expects a list of values"
            )
        return FilterParam(field=field, operator=operator, value=tuple(values))

    if not isinstance(value, str):
        raise InvalidParamError(
            _PARAM, f"Filter {field}[{operator.value}] expects a single value"
        )
    return FilterParam(field=field, operator=operator, value=value)
