"""Form builder interfaces.

Defines the abstract base class for the engines that render form fields into
templates and remove them again, together with the tag naming conventions
that templates use to declare form fields.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

# Blocks with a label for one value of a field: form:label:<name>:<value>
PREFIX_FORM_LABEL = "form:label:"

# Placeholders that are filled in inside custom blocks
ID_FORM_LABEL = "form:label"
ID_FORM_FIELD = "form:field"
ID_FORM_NAME = "form:name"
ID_FORM_VALUE = "form:value"

SUFFIX_SELECTED = ":selected"
SUFFIX_CHECKED = ":checked"

ValueSet = Sequence[str | None] | str


class FormBuilderError(Exception):
    """Exception raised when form fields can't be generated."""

    pass


class BaseFormBuilder(ABC):
    """Abstract base class for form builders.

    A form builder fills in the form field tags of a template from property
    metadata and submitted values. Every generating method returns the tags it
    wrote; removing the same field restores the template to its previous
    content.
    """

    @abstractmethod
    def generate_form(
        self,
        template: Any,
        bean: Any,
        values: Mapping[str, ValueSet] | None = None,
        prefix: str | None = None,
    ) -> list[str]:
        """Generate the form fields of every property of a bean.

        Args:
            template: The template to render into.
            bean: A bean instance or a bean class.
            values: Submitted values keyed by prefixed field name. When
                provided they take precedence over the bean's own values.
            prefix: Prefix that is prepended to every property name.

        Returns:
            The value tags that were filled in.

        Raises:
            TypeError: If bean isn't a supported bean or bean class.
            BeanAccessError: If the bean can't be instantiated or read.
        """

    @abstractmethod
    def remove_form(self, template: Any, bean: Any, prefix: str | None = None) -> None:
        """Remove the form fields of every property of a bean."""

    @abstractmethod
    def generate_field(
        self,
        template: Any,
        property_or_name: Any,
        values: ValueSet | None = None,
        prefix: str | None = None,
        property_type: Any = None,
    ) -> list[str]:
        """Generate the form fields for a single property.

        Args:
            template: The template to render into.
            property_or_name: A ConstrainedProperty or a plain field name.
            values: The submitted values for the field.
            prefix: Prefix that is prepended to the field name.
            property_type: Optional type whose enumeration supplies options.

        Returns:
            The value tags that were filled in.
        """

    @abstractmethod
    def replace_field(
        self,
        template: Any,
        template_field_name: str,
        property_or_name: Any,
        values: ValueSet | None = None,
        prefix: str | None = None,
        property_type: Any = None,
    ) -> list[str]:
        """Generate a field into the tags of another name, replacing content."""

    @abstractmethod
    def remove_field(self, template: Any, name: str, prefix: str | None = None) -> None:
        """Remove every tag that generating the field could have filled in."""

    @abstractmethod
    def remove_template_field(self, template: Any, template_field_name: str) -> None:
        """Remove the field tags of an exact template field name."""

    @abstractmethod
    def select_parameter(self, template: Any, name: str, values: ValueSet | None) -> list[str]:
        """Mark the checked and selected tags of a parameter's values."""

    @abstractmethod
    def unselect_parameter(self, template: Any, name: str, values: ValueSet | None) -> None:
        """Clear the checked and selected tags of a parameter's values."""
