"""Enumeration option source.

Turns an ``enum.Enum`` subclass, or any other ordered finite collection of
labelled values, into an option list.
"""

from collections.abc import Iterable
from enum import Enum
from types import UnionType
from typing import Any, Literal, Union, get_args, get_origin

from formbinder.interfaces.options import SKIP, BaseOptionSource, Option, OptionEntry


class EnumOptionSource(BaseOptionSource):
    """Option source backed by an enumeration.

    Members are converted to options in definition order. The submitted value
    of a member is ``str(member.value)``; its declared label is taken from a
    ``label`` attribute when the member has one.

    Attributes:
        enumeration: The enum class or iterable the options come from.
    """

    def __init__(self, enumeration: type[Enum] | Iterable[Any], label_attribute: str = "label") -> None:
        """Initialize the option source.

        Args:
            enumeration: An Enum subclass, or an iterable of members, values or
                ``(value, label)`` pairs.
            label_attribute: Name of the member attribute holding the label.
        """
        self.enumeration = enumeration
        self._label_attribute = label_attribute

    def options(self) -> list[Option]:
        options: list[Option] = []
        for member in self.enumeration:
            if member is None:
                options.append(SKIP)
            elif isinstance(member, Enum):
                label = getattr(member, self._label_attribute, None)
                options.append(OptionEntry(str(member.value), None if label is None else str(label)))
            elif isinstance(member, tuple) and len(member) == 2:
                options.append(OptionEntry(str(member[0]), member[1]))
            else:
                options.append(OptionEntry(str(member)))
        return options

    def __repr__(self) -> str:
        return f"EnumOptionSource({self.enumeration!r})"


def option_source_for_type(property_type: Any) -> BaseOptionSource | None:
    """Derive an option source from a property's declared type.

    Enum subclasses, ``Literal[...]`` types and collections of either (for
    example ``list[Color]``) have a finite set of values; any other type has
    no options.

    Args:
        property_type: The declared type of the property.

    Returns:
        An option source, or None when the type doesn't enumerate values.
    """
    if property_type is None:
        return None
    if isinstance(property_type, type) and issubclass(property_type, Enum):
        return EnumOptionSource(property_type)

    origin = get_origin(property_type)
    args = [arg for arg in get_args(property_type) if arg is not type(None)]
    if origin is Literal:
        return EnumOptionSource(args)
    if origin in (list, tuple, set, frozenset, Union, UnionType) and args:
        for arg in args:
            if arg is Ellipsis:
                continue
            source = option_source_for_type(arg)
            if source is not None:
                return source
    return None
