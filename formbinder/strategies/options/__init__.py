"""Concrete option source implementations."""

from formbinder.strategies.options.enums import EnumOptionSource, option_source_for_type
from formbinder.strategies.options.explicit import ListOptionSource

__all__ = [
    "EnumOptionSource",
    "ListOptionSource",
    "option_source_for_type",
]
