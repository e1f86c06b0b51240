"""Form builder strategies.

Implements HTML form field generation, option rendering and label
resolution on top of the template store interface.
"""

from formbinder.strategies.form_builders.html import HtmlFormBuilder
from formbinder.strategies.form_builders.labels import LabelResolver
from formbinder.strategies.form_builders.models import (
    ConstrainedProperty,
    FieldKind,
    RenderedOptions,
    ResolvedOption,
)
from formbinder.strategies.form_builders.options import OptionRenderer

__all__ = [
    "HtmlFormBuilder",
    "LabelResolver",
    "OptionRenderer",
    "ConstrainedProperty",
    "FieldKind",
    "RenderedOptions",
    "ResolvedOption",
]
