"""
Cell value normalization.

Turns one document property value into the text written to a worksheet
cell. Nested arrays and objects are kept as compact JSON rather than
dropped, and normalization never raises.
"""

import json
from enum import Enum
from numbers import Number
from typing import Any, Callable, Dict

from cosmos2xlsx.logging import get_logger

logger = get_logger("cosmos2xlsx.export.normalizer")


class ValueKind(Enum):
    """Variants a document property value can take"""
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    OTHER = "other"


def classify_value(value: Any) -> ValueKind:
    """Return the variant of a document value"""
    if value is None:
        return ValueKind.NULL
    # bool first, it is a subclass of int
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, Number):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        return ValueKind.OBJECT
    return ValueKind.OTHER


def _render_structure(value: Any) -> str:
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.debug(f"Falling back to str() for unserializable value: {e}")
        return str(value)


def _render_number(value: Any) -> str:
    # repr gives the shortest round-trip form for floats
    if isinstance(value, float):
        return repr(value)
    return str(value)


_RENDERERS: Dict[ValueKind, Callable[[Any], str]] = {
    ValueKind.NULL: lambda value: "",
    ValueKind.BOOL: lambda value: "true" if value else "false",
    ValueKind.NUMBER: _render_number,
    ValueKind.STRING: lambda value: value,
    ValueKind.ARRAY: _render_structure,
    ValueKind.OBJECT: _render_structure,
    ValueKind.OTHER: str,
}


def normalize_cell_value(value: Any) -> str:
    """
    Convert a document value into spreadsheet-safe text.

    null becomes an empty string, booleans become "true"/"false", strings
    are kept as-is, numbers use their default textual form, and arrays or
    objects become compact JSON such as {"a":1}.

    Args:
        value: Property value as decoded from the document

    Returns:
        str: Cell text
    """
    kind = classify_value(value)
    try:
        return _RENDERERS[kind](value)
    except Exception as e:
        # A single cell must never fail the export
        logger.debug(f"Cannot render {kind.value} value, using repr: {e}")
        return object.__repr__(value)
