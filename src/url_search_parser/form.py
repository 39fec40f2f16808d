"""Form-urlencoded decoding with bracket nesting, and its inverse.

``decode_form`` turns ``a=1&filter[status]=active&tags[]=x&tags[]=y`` into::

    {"a": "1", "filter": {"status": "active"}, "tags": ["x", "y"]}

Keys keep their decode order. Containers whose keys are exactly
``0..n-1`` become lists; every other container stays a mapping.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any
from urllib.parse import quote_plus, unquote_plus

from .config import DEFAULT_CONFIG, ParserConfig

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

_INT_KEY = re.compile(r"-?(?:0|[1-9][0-9]*)")

# A ``None`` segment stands for ``[]`` (append at the next free index).
KeyPath = tuple[str, list[str | None]]


def decode_form(query: str, *, config: ParserConfig | None = None) -> dict[str, Any]:
    """Decode a query string into an ordered, possibly nested mapping."""
    cfg = config or DEFAULT_CONFIG
    pairs = [chunk for chunk in query.split(cfg.separator) if chunk]
    if len(pairs) > cfg.max_input_vars:
        logger.warning(
            "Input variables exceeded %d, dropping %d pair(s)",
            cfg.max_input_vars,
            len(pairs) - cfg.max_input_vars,
        )
        pairs = pairs[: cfg.max_input_vars]

    result: dict[str, Any] = {}
    for pair in pairs:
        raw_key, _, raw_value = pair.partition("=")
        path = split_key(unquote_plus(raw_key))
        if path is None:
            continue
        base, segments = path
        if len(segments) > cfg.max_nesting_level:
            logger.warning(
                "Input variable %r nesting level exceeds %d, dropping it",
                base,
                cfg.max_nesting_level,
            )
            result.pop(base, None)
            continue
        _assign(result, base, segments, unquote_plus(raw_value))

    return {key: _listify(value) for key, value in result.items()}


def split_key(key: str) -> KeyPath | None:
    """Split a decoded key into its base name and bracket segments.

    Returns ``None`` when the key has no usable base name.
    """
    key = key.lstrip(" ")
    open_at = key.find("[")
    head = key if open_at < 0 else key[:open_at]
    base = head.replace(" ", "_").replace(".", "_")
    if not base:
        return None
    if open_at < 0:
        return base, []

    segments: list[str | None] = []
    pos = open_at
    while pos < len(key) and key[pos] == "[":
        close_at = key.find("]", pos + 1)
        if close_at < 0:
            if not segments:
                # Not an index: the bracket becomes part of the name.
                tail = key[pos + 1 :]
                for char in " .[":
                    tail = tail.replace(char, "_")
                return f"{base}_{tail}", []
            break
        segment = key[pos + 1 : close_at]
        segments.append(segment if segment else None)
        pos = close_at + 1
    return base, segments


def _assign(
    target: dict[str, Any], base: str, segments: list[str | None], value: str
) -> None:
    keys: list[str | None] = [base, *segments]
    node = target
    for key in keys[:-1]:
        if key is None:
            key = _next_index(node)
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child
    last = keys[-1]
    if last is None:
        last = _next_index(node)
    node[last] = value


def _next_index(node: dict[str, Any]) -> str:
    indices = [int(key) for key in node if _is_int_key(key)]
    return str(max(indices) + 1) if indices else "0"


def _is_int_key(key: str) -> bool:
    return key != "-0" and _INT_KEY.fullmatch(key) is not None


def _listify(value: Any) -> Any:
    if not isinstance(value, dict):
        return value
    converted = {key: _listify(item) for key, item in value.items()}
    if list(converted) == [str(i) for i in range(len(converted))]:
        return list(converted.values())
    return converted


def encode_form(params: Mapping[str, Any]) -> str:
    """Encode a (possibly nested) mapping into a query string.

    Nested mappings and lists use bracket notation with explicit keys
    (``tags[0]=x``). ``None`` values and empty containers are omitted;
    booleans are written as ``1``/``0``.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        _flatten(str(key), value, pairs)
    return "&".join(
        f"{quote_plus(key, safe='[]')}={quote_plus(value)}" for key, value in pairs
    )


def _flatten(prefix: str, value: Any, out: list[tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, dict):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]", item, out)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, out)
    elif isinstance(value, bool):
        out.append((prefix, "1" if value else "0"))
    else:
        out.append((prefix, str(value)))
