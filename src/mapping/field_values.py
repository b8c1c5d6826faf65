"""Field value helpers shared by mapping rules.

This module resolves multilingual text, nested coordinates, and the
integer/float storage split used by dogma attribute values.
"""

from __future__ import annotations

import json
import math
from typing import Any, Mapping

from core.constants import INT32_MAX, INT32_MIN
from core.types import RowValue

LANGUAGE_PREFERENCE = ("en", "de", "fr")


def select_text(value: Any) -> str | None:
    """Resolve a multilingual field to one string.

    Args:
        value: Plain string, language-code mapping, or anything else.

    Returns:
        The string itself, else the ``en``, ``de``, then ``fr`` entry,
        else None. Never raises.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        for language in LANGUAGE_PREFERENCE:
            text = value.get(language)
            if text is not None:
                return str(text)
    return None


def is_multilingual(value: Any) -> bool:
    """Return whether a value looks like a language-code mapping."""
    return isinstance(value, Mapping) and any(
        language in value for language in LANGUAGE_PREFERENCE
    )


def coordinate(record: Mapping[str, Any], axis: str, default: float | None) -> Any:
    """Read ``position.<axis>`` from a record, falling back to a default."""
    position = record.get("position")
    if not isinstance(position, Mapping):
        return default
    value = position.get(axis)
    return default if value is None else value


def split_numeric(value: Any) -> tuple[int | None, float | None]:
    """Split a numeric value into integer and float storage columns.

    Integral values inside the signed 32-bit range go to the integer
    column; everything else goes to the float column.

    Args:
        value: Attribute value decoded from JSON.

    Returns:
        ``(value_int, value_float)`` with exactly one populated, or both
        None when the value is missing or not numeric.
    """
    if value is None:
        return None, None
    if isinstance(value, bool):
        return None, float(value)
    if isinstance(value, int):
        if INT32_MIN <= value <= INT32_MAX:
            return value, None
        return None, float(value)
    if not isinstance(value, float):
        return None, None
    number = value
    if math.isfinite(number) and number.is_integer() and INT32_MIN <= number <= INT32_MAX:
        return int(number), None
    return None, number


def scalar_value(value: Any) -> RowValue:
    """Coerce a passthrough value into a storable scalar.

    Multilingual mappings resolve to text; other nested structures are
    stored as JSON text.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if is_multilingual(value):
        return select_text(value)
    return json.dumps(value, sort_keys=True)


def nested_items(record: Mapping[str, Any], field_name: str) -> list[Mapping[str, Any]]:
    """Return the mapping entries of a nested array field, or an empty list."""
    items = record.get(field_name)
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, Mapping)]


def value_or(record: Mapping[str, Any], field_name: str, default: Any) -> Any:
    """Return a field value, or the default when it is missing or null."""
    value = record.get(field_name)
    return default if value is None else value
