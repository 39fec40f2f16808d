"""Dynamic coercion of decoded query values.

Decoded values are ``str``, ``list`` or ``dict``. ``coerce`` maps such a
value onto a requested ``CoercionType``; the rules apply in this order:

1. ``array`` from a string splits on ``,``.
2. ``string`` from a list or mapping joins the items with ``,``.
3. ``bool`` from the literals ``true``/``false`` (any case).
4. Generic scalar conversion. Strings convert through their leading
   number (``"10abc"`` -> 10, ``"abc"`` -> 0); ``CoercionError`` is left
   for containers and non-finite numbers.
"""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import TYPE_CHECKING, Any

from .exceptions import CoercionError, UnsupportedTypeError

if TYPE_CHECKING:
    from collections.abc import Callable


class CoercionType(str, Enum):
    """Target types accepted by ``coerce``."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"

    @classmethod
    def from_token(cls, token: str | CoercionType) -> CoercionType:
        """Resolve a case-insensitive type token such as ``"Integer"``."""
        if isinstance(token, CoercionType):
            return token
        normalized = token.lower()
        try:
            return _TOKENS[normalized]
        except KeyError:
            raise UnsupportedTypeError(normalized, list(_TOKENS)) from None


_TOKENS: dict[str, CoercionType] = {
    "boolean": CoercionType.BOOL,
    "bool": CoercionType.BOOL,
    "integer": CoercionType.INT,
    "int": CoercionType.INT,
    "float": CoercionType.FLOAT,
    "double": CoercionType.FLOAT,
    "string": CoercionType.STRING,
    "array": CoercionType.ARRAY,
}

_BOOL_LITERALS = ("true", "false")

_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER = re.compile(r"[+-]?\d+")


def coerce(value: Any, target: CoercionType | str) -> Any:
    """Return ``value`` converted to ``target``.

    Raises:
        UnsupportedTypeError: If ``target`` is not a known type token.
        CoercionError: If ``value`` cannot be represented as ``target``.
    """
    kind = CoercionType.from_token(target)

    if kind is CoercionType.ARRAY and isinstance(value, str):
        return value.split(",")
    if kind is CoercionType.STRING and isinstance(value, (list, tuple, dict)):
        return _join(value)
    if (
        kind is CoercionType.BOOL
        and isinstance(value, str)
        and value.lower() in _BOOL_LITERALS
    ):
        return value.lower() == "true"
    return _CONVERTERS[kind](value)


def _join(value: list[Any] | tuple[Any, ...] | dict[str, Any]) -> str:
    items = value.values() if isinstance(value, dict) else value
    parts: list[str] = []
    for item in items:
        if isinstance(item, (list, tuple, dict)):
            raise CoercionError(CoercionType.STRING.value, value)
        parts.append(_to_string(item))
    return ",".join(parts)


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        prefix = _numeric_prefix(value)
        if _INTEGER.fullmatch(prefix):
            return int(prefix)
        value = float(prefix)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise CoercionError(CoercionType.INT.value, value)
        return int(value)
    raise CoercionError(CoercionType.INT.value, value)


def _to_float(value: Any) -> float:
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        return float(_numeric_prefix(value))
    raise CoercionError(CoercionType.FLOAT.value, value)


def _numeric_prefix(text: str) -> str:
    """Leading number of ``text`` (``"10abc"`` -> ``"10"``), ``"0"`` if none."""
    match = _NUMBER.match(text.lstrip())
    return match.group(0) if match else "0"


def _to_string(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    raise CoercionError(CoercionType.STRING.value, value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value not in ("", "0")
    if value is None:
        return False
    return bool(value)


def _to_array(value: Any) -> list[Any] | dict[str, Any]:
    if isinstance(value, dict):
        return dict(value)
    if isinstance(value, (list, tuple)):
        return list(value)
    if value is None:
        return []
    return [value]


_CONVERTERS: dict[CoercionType, Callable[[Any], Any]] = {
    CoercionType.BOOL: _to_bool,
    CoercionType.INT: _to_int,
    CoercionType.FLOAT: _to_float,
    CoercionType.STRING: _to_string,
    CoercionType.ARRAY: _to_array,
}
