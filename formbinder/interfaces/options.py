"""Option source interfaces.

Option sources supply the ordered list of possible values for radio button
groups, checkbox lists and select boxes.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class OptionEntry:
    """A selectable option.

    Attributes:
        value: The raw value that is submitted when the option is chosen.
        label: The declared display label, None to fall back to the value.
    """

    value: str
    label: str | None = None


@dataclass(frozen=True)
class OptionSkip:
    """A reserved slot in an option list that doesn't emit an option."""


Option = OptionEntry | OptionSkip

SKIP = OptionSkip()


class BaseOptionSource(ABC):
    """Abstract base class for option sources.

    Example:
        ```python
        class ListOptionSource(BaseOptionSource):
            def options(self) -> list[Option]:
                return [OptionEntry(value) for value in self._values]
        ```
    """

    @abstractmethod
    def options(self) -> list[Option]:
        """Return the options in declaration order.

        Returns:
            A list of OptionEntry objects, with OptionSkip markers for
            reserved slots.
        """

    def declared_label(self, value: str) -> str | None:
        """Return the declared label for a value, if the source has one."""
        for option in self.options():
            if isinstance(option, OptionEntry) and option.value == value:
                return option.label
        return None
