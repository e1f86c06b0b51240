"""Concrete strategy implementations."""

from formbinder.strategies.form_builders import (
    ConstrainedProperty,
    HtmlFormBuilder,
)
from formbinder.strategies.beans import (
    ModelInspector,
)
from formbinder.strategies.options import (
    EnumOptionSource,
    ListOptionSource,
)
from formbinder.strategies.template_engine import (
    MarkupTemplate,
)

__all__ = [
    "ConstrainedProperty",
    "HtmlFormBuilder",
    "ModelInspector",
    "EnumOptionSource",
    "ListOptionSource",
    "MarkupTemplate",
]
