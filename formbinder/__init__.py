"""Form field generation for comment-tag templates.

Renders HTML form controls into the ``form:<kind>:<name>`` value tags of a
template from property constraints and submitted or default values, and
removes them again.
"""

from formbinder.interfaces import (
    BaseBeanInspector,
    BaseFormBuilder,
    BaseOptionSource,
    BaseTemplate,
    BeanAccessError,
    FormBuilderError,
    OptionEntry,
    OptionSkip,
    SKIP,
    TemplateError,
)
from formbinder.strategies import (
    ConstrainedProperty,
    EnumOptionSource,
    HtmlFormBuilder,
    ListOptionSource,
    MarkupTemplate,
    ModelInspector,
)

__version__ = "0.1.0"

__all__ = [
    "BaseBeanInspector",
    "BaseFormBuilder",
    "BaseOptionSource",
    "BaseTemplate",
    "BeanAccessError",
    "ConstrainedProperty",
    "EnumOptionSource",
    "FormBuilderError",
    "HtmlFormBuilder",
    "ListOptionSource",
    "MarkupTemplate",
    "ModelInspector",
    "OptionEntry",
    "OptionSkip",
    "SKIP",
    "TemplateError",
]
