"""NodeType StrEnum and helpers for the native JSON value model.

The diff engine works directly on Python's JSON value family rather than a
wrapper tree:

- ``None``                                -> NULL
- ``bool``                                -> BOOLEAN
- ``int`` / ``float`` / ``Decimal``       -> NUMBER
- ``str``                                 -> STRING
- ``bytes`` / ``bytearray``               -> BYTES
- ``list`` / ``tuple``                    -> ARRAY
- ``dict`` (string keys, insertion order) -> OBJECT

This module classifies values, compares scalars exactly, and renders the
compact serialized text used by the difference display.
"""

from __future__ import annotations

import base64
import json
from decimal import Decimal
from enum import StrEnum, auto
from typing import Any

__all__ = [
    "CONTAINER_TYPES",
    "JsonValue",
    "NodeType",
    "deep_equals",
    "node_type",
    "parse_json",
    "to_json_text",
]

# Type alias for valid tree values
JsonValue = (
    dict[str, Any]
    | list[Any]
    | tuple[Any, ...]
    | str
    | bytes
    | int
    | float
    | Decimal
    | bool
    | None
)


class NodeType(StrEnum):
    """Enumeration of the seven kinds of JSON tree value.

    StrEnum values are the lowercased member names:
    - NULL    -> "null"    : ``None``
    - BOOLEAN -> "boolean" : ``True`` / ``False``
    - NUMBER  -> "number"  : int, float or Decimal
    - STRING  -> "string"  : text
    - BYTES   -> "bytes"   : binary data, displayed as base64
    - ARRAY   -> "array"   : ordered sequence of values
    - OBJECT  -> "object"  : ordered, name-unique properties
    """

    NULL = auto()
    BOOLEAN = auto()
    NUMBER = auto()
    STRING = auto()
    BYTES = auto()
    ARRAY = auto()
    OBJECT = auto()


CONTAINER_TYPES = frozenset({NodeType.ARRAY, NodeType.OBJECT})


def node_type(value: Any) -> NodeType:
    """Classify a tree value.

    bool MUST be checked before int because bool is a subclass of int.

    Raises:
        TypeError: If value is not part of the tree value model.
    """
    if value is None:
        return NodeType.NULL
    if isinstance(value, bool):
        return NodeType.BOOLEAN
    if isinstance(value, (int, float, Decimal)):
        return NodeType.NUMBER
    if isinstance(value, str):
        return NodeType.STRING
    if isinstance(value, (bytes, bytearray)):
        return NodeType.BYTES
    if isinstance(value, (list, tuple)):
        return NodeType.ARRAY
    if isinstance(value, dict):
        return NodeType.OBJECT
    raise TypeError(f"Unsupported JSON value type: {type(value)!r}")


def deep_equals(left: Any, right: Any) -> bool:
    """Return True if two tree values are structurally identical.

    Comparison is exact and type-sensitive: ``True`` never equals ``1`` and
    ``"1"`` never equals ``1``.  Numbers compare by exact value, so ``1`` equals
    ``1.0`` while ``Decimal("0.1")`` does not equal the float ``0.1``.  Object
    property order is irrelevant; array element order is significant.
    """
    if left is right:
        return True

    left_type = node_type(left)
    if left_type != node_type(right):
        return False

    if left_type == NodeType.OBJECT:
        if left.keys() != right.keys():
            return False
        return all(deep_equals(value, right[name]) for name, value in left.items())

    if left_type == NodeType.ARRAY:
        if len(left) != len(right):
            return False
        return all(deep_equals(a, b) for a, b in zip(left, right, strict=True))

    if left_type == NodeType.BYTES:
        return bytes(left) == bytes(right)

    return bool(left == right)


def to_json_text(value: Any) -> str:
    """Serialize a tree value to compact JSON text for display.

    Non-ASCII characters are kept as-is, bytes become a quoted base64 string,
    floats keep their fractional part (``2.0``) and Decimals their canonical
    text.  A container nested inside itself is written as ``[...]`` or
    ``{...}`` where it recurs, the way ``repr`` shows recursive containers.

    Raises:
        TypeError: If value (or anything nested in it) is not a tree value.
    """
    return _to_json_text(value, set())


def _to_json_text(value: Any, active: set[int]) -> str:
    kind = node_type(value)

    if kind == NodeType.NULL:
        return "null"
    if kind == NodeType.BOOLEAN:
        return "true" if value else "false"
    if kind == NodeType.NUMBER:
        if isinstance(value, Decimal):
            return str(value)
        return json.dumps(value)
    if kind == NodeType.STRING:
        return json.dumps(value, ensure_ascii=False)
    if kind == NodeType.BYTES:
        return '"' + base64.b64encode(bytes(value)).decode("ascii") + '"'

    if id(value) in active:
        return "[...]" if kind == NodeType.ARRAY else "{...}"
    active.add(id(value))
    try:
        if kind == NodeType.ARRAY:
            return "[" + ",".join(_to_json_text(item, active) for item in value) + "]"
        members = (
            json.dumps(str(name), ensure_ascii=False)
            + ":"
            + _to_json_text(member, active)
            for name, member in value.items()
        )
        return "{" + ",".join(members) + "}"
    finally:
        active.discard(id(value))


def parse_json(text: str | None) -> Any:
    """Parse JSON text into a tree value; ``None`` text parses to ``None``.

    Raises:
        json.JSONDecodeError: If the text is not valid JSON.
    """
    if text is None:
        return None
    return json.loads(text)
