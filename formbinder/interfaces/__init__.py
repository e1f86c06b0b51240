"""Abstract base classes for form binding collaborators."""

from formbinder.interfaces.bean import BaseBeanInspector, BeanAccessError, BeanProperty
from formbinder.interfaces.form_builder import BaseFormBuilder, FormBuilderError
from formbinder.interfaces.options import SKIP, BaseOptionSource, Option, OptionEntry, OptionSkip
from formbinder.interfaces.template import BaseTemplate, TemplateError

__all__ = [
    "BaseTemplate",
    "TemplateError",
    "BaseOptionSource",
    "Option",
    "OptionEntry",
    "OptionSkip",
    "SKIP",
    "BaseBeanInspector",
    "BeanProperty",
    "BeanAccessError",
    "BaseFormBuilder",
    "FormBuilderError",
]
