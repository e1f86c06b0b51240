"""Value conversion helpers shared by the form builders."""

from collections.abc import Iterable
from datetime import date, datetime
from enum import Enum
from typing import Any

TRUTHY_VALUES = frozenset({"true", "t", "1", "y", "yes", "on"})


def effective_name(name: str, prefix: str | None) -> str:
    """Prepend the prefix to a field name."""
    if prefix:
        return prefix + name
    return name


def to_string(value: Any) -> str:
    """Convert a single value to the string form used for comparisons.

    Enum members compare through their value, booleans through the lowercase
    words that are submitted by checkboxes.
    """
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def to_string_values(value: Any) -> list[str] | None:
    """Convert a bean property value to a list of submitted-style strings.

    Args:
        value: The property value, a scalar or a collection.

    Returns:
        None when the value is None, otherwise one string per element.
    """
    if value is None:
        return None
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return [to_string(value)]
    if isinstance(value, dict):
        return [to_string(key) for key in value]
    return [to_string(item) for item in value if item is not None]


def normalize_values(values: Any) -> list[str | None] | None:
    """Normalize submitted values to a list that keeps submission order.

    A bare string counts as a single submitted value, None elements are kept
    so that positional semantics stay intact.
    """
    if values is None:
        return None
    if isinstance(values, str) or not isinstance(values, Iterable):
        return [to_string(values)]
    return [None if value is None else to_string(value) for value in values]


def first_value(values: list[str | None] | None) -> str | None:
    """Return the first submitted value when it's present."""
    if values and values[0] is not None:
        return values[0]
    return None


def convert_to_boolean(value: Any, truthy_values: Iterable[str] = TRUTHY_VALUES) -> bool:
    """Interpret a submitted token as a boolean, anything unknown is False."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in truthy_values


def sanitize_attributes(value: str | None) -> str:
    """Prepare template authored attributes for inclusion in a tag."""
    if not value or not value.strip():
        return ""
    return " " + value.strip()
