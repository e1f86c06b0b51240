"""Template store interface.

Defines the abstract base class for the mutable templates that form fields
are rendered into. A template exposes named value tags (placeholders that
receive content) and named blocks (reusable fragments that can be expanded
into value tags).
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping


class TemplateError(Exception):
    """Exception raised when a template can't be parsed or rendered."""

    pass


class BaseTemplate(ABC):
    """Abstract base class for template stores.

    The form builders only talk to templates through this contract, the
    parsing and storage mechanics stay with the implementation.

    Example:
        ```python
        class MarkupTemplate(BaseTemplate):
            def has_value_id(self, value_id: str) -> bool:
                return value_id in self._value_ids
        ```
    """

    # =========================================================================
    # Value tags
    # =========================================================================

    @abstractmethod
    def has_value_id(self, value_id: str) -> bool:
        """Check whether the template declares a value tag.

        Args:
            value_id: The name of the value tag.

        Returns:
            True if a tag with this name appears in the template or its blocks.
        """

    @abstractmethod
    def is_value_set(self, value_id: str) -> bool:
        """Check whether content has been assigned to a value tag."""

    @abstractmethod
    def get_value(self, value_id: str) -> str | None:
        """Return the content assigned to a value tag, or None when unset."""

    @abstractmethod
    def set_value(self, value_id: str, value: str) -> None:
        """Assign content to a value tag, replacing what was there."""

    @abstractmethod
    def append_value(self, value_id: str, value: str) -> None:
        """Append content to a value tag."""

    @abstractmethod
    def remove_value(self, value_id: str) -> None:
        """Clear a value tag so it renders its default content again."""

    def blank_value(self, value_id: str) -> None:
        """Assign empty content to a value tag."""
        self.set_value(value_id, "")

    @abstractmethod
    def has_default_value(self, value_id: str) -> bool:
        """Check whether a value tag was authored with default content."""

    @abstractmethod
    def get_default_value(self, value_id: str) -> str | None:
        """Return the authored default content of a value tag."""

    # =========================================================================
    # Blocks
    # =========================================================================

    @abstractmethod
    def has_block(self, block_id: str) -> bool:
        """Check whether the template declares a block."""

    @abstractmethod
    def get_block(self, block_id: str) -> str:
        """Render a block with the values that are currently assigned.

        Raises:
            TemplateError: If the block doesn't exist.
        """

    def set_block(self, value_id: str, block_id: str) -> None:
        """Render a block into a value tag."""
        self.set_value(value_id, self.get_block(block_id))

    def append_block(self, value_id: str, block_id: str) -> None:
        """Render a block and append it to a value tag."""
        self.append_value(value_id, self.get_block(block_id))

    # =========================================================================
    # Generated values
    # =========================================================================

    @abstractmethod
    def add_generated_values(self, value_ids: Iterable[str]) -> None:
        """Remember value tags that were filled in by a generator."""

    @abstractmethod
    def is_value_generated(self, value_id: str) -> bool:
        """Check whether a value tag was filled in by a generator."""

    # =========================================================================
    # Label bundles
    # =========================================================================

    @abstractmethod
    def add_label_bundle(self, bundle: Mapping[str, str]) -> None:
        """Register a dynamic label lookup, keyed by ``"<field>:<value>"``."""

    @abstractmethod
    def remove_label_bundle(self, bundle: Mapping[str, str]) -> None:
        """Unregister a previously added label lookup."""

    @abstractmethod
    def clear_label_bundles(self) -> None:
        """Unregister all label lookups."""

    @property
    @abstractmethod
    def label_bundles(self) -> list[Mapping[str, str]]:
        """Return the registered label lookups in registration order."""

    # =========================================================================
    # Output
    # =========================================================================

    @abstractmethod
    def encode(self, value: str) -> str:
        """Encode raw text for safe inclusion in the template's markup."""

    @abstractmethod
    def get_content(self) -> str:
        """Render the complete template with the current values."""
