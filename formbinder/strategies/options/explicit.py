"""Explicit list option source."""

from collections.abc import Iterable

from formbinder.interfaces.options import SKIP, BaseOptionSource, Option, OptionEntry, OptionSkip


class ListOptionSource(BaseOptionSource):
    """Option source backed by an explicit list.

    Entries can be plain values, ``(value, label)`` pairs, ready-made
    OptionEntry objects, or None to reserve a slot without emitting an option.

    Example:
        ```python
        source = ListOptionSource(["a1", ("a2", "Answer 2"), None, "a3"])
        ```
    """

    def __init__(self, entries: Iterable[object]) -> None:
        """Initialize the option list.

        Args:
            entries: The option entries in display order.

        Raises:
            ValueError: If a pair doesn't have exactly two elements.
        """
        options: list[Option] = []
        for entry in entries:
            if entry is None or isinstance(entry, OptionSkip):
                options.append(SKIP)
            elif isinstance(entry, OptionEntry):
                options.append(entry)
            elif isinstance(entry, tuple):
                if len(entry) != 2:
                    raise ValueError(f"Option pairs need a value and a label, got: {entry!r}")
                value, label = entry
                options.append(SKIP if value is None else OptionEntry(str(value), label))
            else:
                options.append(OptionEntry(str(entry)))
        self._options = options

    def options(self) -> list[Option]:
        return list(self._options)

    def __repr__(self) -> str:
        return f"ListOptionSource({self._options!r})"
