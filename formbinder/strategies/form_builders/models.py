"""Form builder domain models.

Pydantic models describing the properties that form fields are generated
for, and the intermediate results of option rendering.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from formbinder.interfaces.options import BaseOptionSource
from formbinder.strategies.form_builders.values import to_string_values
from formbinder.strategies.options import EnumOptionSource, ListOptionSource


class FieldKind(str, Enum):
    """The kinds of form fields a template can declare.

    The value is the middle part of the tag name, ``form:<kind>:<name>``.
    """

    HIDDEN = "hidden"
    INPUT = "input"
    SECRET = "secret"
    TEXTAREA = "textarea"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    SELECT = "select"
    DISPLAY = "display"

    @property
    def prefix(self) -> str:
        """Return the tag prefix of this kind."""
        return f"form:{self.value}:"

    def tag(self, template_field_name: str) -> str:
        """Return the value tag of this kind for a template field name."""
        return self.prefix + template_field_name

    def attributes_block(self, template_field_name: str) -> str:
        """Return the name of the custom attributes block of a field."""
        return f"{self.prefix}attributes:{template_field_name}"


class ConstrainedProperty(BaseModel):
    """A bean property together with the constraints that shape its field."""

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    name: str = Field(min_length=1, description="The property name")
    default_value: Any = Field(default=None, description="Value used when nothing was submitted")
    options: BaseOptionSource | None = Field(
        default=None,
        description="The values the property is constrained to",
    )
    max_length: int | None = Field(default=None, ge=0, description="Maximum text length")
    min_length: int | None = Field(default=None, ge=0, description="Minimum text length")
    not_null: bool = Field(default=False, description="Whether a value is required")
    not_empty: bool = Field(default=False, description="Whether an empty value is rejected")
    editable: bool = Field(default=True, description="Whether the field can be changed")
    email: bool = Field(default=False, description="Whether the value is an email address")
    url: bool = Field(default=False, description="Whether the value is a URL")
    multiple: bool = Field(default=False, description="Whether several values can be chosen")

    @field_validator("options", mode="before")
    @classmethod
    def coerce_options(cls, v: Any) -> BaseOptionSource | None:
        """Accept lists and enum classes as option sources."""
        if v is None or isinstance(v, BaseOptionSource):
            return v
        if isinstance(v, type) and issubclass(v, Enum):
            return EnumOptionSource(v)
        if isinstance(v, (list, tuple)):
            return ListOptionSource(v)
        raise ValueError(f"Unsupported option source: {v!r}")

    @property
    def has_default_value(self) -> bool:
        """Whether a default value has been configured."""
        return self.default_value is not None

    @property
    def in_list(self) -> bool:
        """Whether the property is constrained to a list of options."""
        return self.options is not None

    def default_values(self) -> list[str] | None:
        """The default value as a list of strings.

        Scalar defaults become a single element, collections one element per
        item. Single-valued fields use the first element.
        """
        return to_string_values(self.default_value)

    def required_min_length(self) -> int:
        """The minimum length implied by the constraints."""
        min_length = 1 if self.not_empty else 0
        if self.min_length is not None and self.min_length > min_length:
            min_length = self.min_length
        return min_length


@dataclass(frozen=True)
class ResolvedOption:
    """An option with its final label and selection state."""

    value: str
    label: str
    selected: bool


@dataclass
class RenderedOptions:
    """The result of rendering an option list.

    Attributes:
        fragment: The markup of all rendered options.
        selected_labels: Labels of the active values, in selection order,
            including values that aren't part of the option list.
    """

    fragment: str = ""
    selected_labels: list[str] = field(default_factory=list)
