"""HTML form builder strategy.

Generates HTML form fields into the ``form:<kind>:<name>`` value tags of a
template and removes them again. The kind of field that is generated is
decided by the tags the template declares, not by the property type.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from formbinder.interfaces.bean import BaseBeanInspector
from formbinder.interfaces.form_builder import (
    ID_FORM_NAME,
    ID_FORM_VALUE,
    SUFFIX_CHECKED,
    SUFFIX_SELECTED,
    BaseFormBuilder,
    FormBuilderError,
    ValueSet,
)
from formbinder.interfaces.options import BaseOptionSource
from formbinder.interfaces.template import BaseTemplate
from formbinder.strategies.form_builders.labels import LabelResolver
from formbinder.strategies.form_builders.models import ConstrainedProperty, FieldKind, ResolvedOption
from formbinder.strategies.form_builders.options import OptionRenderer, placeholders
from formbinder.strategies.form_builders.values import (
    TRUTHY_VALUES,
    convert_to_boolean,
    effective_name,
    first_value,
    normalize_values,
    sanitize_attributes,
    to_string_values,
)
from formbinder.strategies.options import ListOptionSource, option_source_for_type

logger = logging.getLogger(__name__)


@dataclass
class _FieldContext:
    """Everything a field generator needs to know about one field."""

    template: BaseTemplate
    field_name: str
    name: str
    template_field_name: str
    prop: ConstrainedProperty | None
    property_type: Any
    values: list[str | None] | None


class HtmlFormBuilder(BaseFormBuilder):
    """Form builder that renders HTML form controls.

    Example:
        ```python
        builder = HtmlFormBuilder()
        template = MarkupTemplate('<form><!--v form:input:login/--></form>')
        touched = builder.generate_field(
            template, ConstrainedProperty(name="login", max_length=12), ["gbevin"]
        )
        builder.remove_field(template, "login")
        ```
    """

    VALUE_SELECTED = ' selected="selected"'
    VALUE_CHECKED = ' checked="checked"'

    MARKUP_HIDDEN = '<input type="hidden" name="{name}"{attributes} />'
    MARKUP_INPUT = '<input type="{type}" name="{name}"{attributes} />'
    MARKUP_TEXTAREA = '<textarea name="{name}"{attributes}>{value}</textarea>'
    MARKUP_SELECT = '<select name="{name}"{attributes}>{options}</select>'
    MARKUP_OPTION = '<option value="{value}"{attributes}>{label}</option>'
    MARKUP_DISPLAY = "<div{attributes}>{value}</div>"

    ATTRIBUTE_VALUE = ' value="{value}"'
    ATTRIBUTE_MINLENGTH = ' minlength="{length}"'
    ATTRIBUTE_MAXLENGTH = ' maxlength="{length}"'
    ATTRIBUTE_REQUIRED = ' required="required"'
    ATTRIBUTE_DISABLED = ' disabled="disabled"'
    ATTRIBUTE_MULTIPLE = ' multiple="multiple"'

    def __init__(
        self,
        inspector: BaseBeanInspector | None = None,
        truthy_values: Iterable[str] = TRUTHY_VALUES,
    ) -> None:
        """Initialize the form builder.

        Args:
            inspector: Bean inspection strategy for whole-form generation.
                Defaults to the pydantic/dataclass ModelInspector.
            truthy_values: Tokens that check a boolean checkbox.
        """
        if inspector is None:
            from formbinder.strategies.beans.model_inspector import ModelInspector

            inspector = ModelInspector()

        self._inspector = inspector
        self._truthy_values = frozenset(value.lower() for value in truthy_values)
        self._options = OptionRenderer(LabelResolver())

    @property
    def inspector(self) -> BaseBeanInspector:
        """Return the bean inspection strategy."""
        return self._inspector

    # =========================================================================
    # Forms
    # =========================================================================

    def generate_form(
        self,
        template: BaseTemplate | None,
        bean: Any,
        values: Mapping[str, ValueSet] | None = None,
        prefix: str | None = None,
    ) -> list[str]:
        touched: list[str] = []

        if template is None or bean is None:
            return touched

        if isinstance(bean, type):
            if not self._inspector.is_bean_class(bean):
                raise TypeError(f"{bean.__name__} is not a supported bean class")
            bean_class = bean
            instance = self._inspector.instantiate(bean)
        else:
            if not self._inspector.is_bean(bean):
                raise TypeError(f"{type(bean).__name__} instances are not supported beans")
            bean_class = type(bean)
            instance = bean

        logger.info(f"Generating form for {bean_class.__name__} with prefix {prefix!r}")

        erroneous_values = self._erroneous_values(instance) if values is None else {}

        for bean_property in self._inspector.get_properties(bean_class):
            if values is not None:
                property_values = values.get(effective_name(bean_property.name, prefix))
            elif bean_property.name in erroneous_values:
                property_values = erroneous_values[bean_property.name]
            else:
                property_values = to_string_values(
                    self._inspector.get_property_value(instance, bean_property.name)
                )

            touched.extend(
                self._generate_field(
                    template,
                    None,
                    bean_property.constrained or bean_property.name,
                    property_values,
                    prefix,
                    bean_property.property_type,
                    replace=False,
                )
            )

        template.add_generated_values(touched)

        logger.info(f"Generated {len(touched)} form tags for {bean_class.__name__}")
        return touched

    def remove_form(self, template: BaseTemplate | None, bean: Any, prefix: str | None = None) -> None:
        if template is None or bean is None:
            return

        bean_class = bean if isinstance(bean, type) else type(bean)
        if not self._inspector.is_bean_class(bean_class):
            raise TypeError(f"{bean_class.__name__} is not a supported bean class")

        for name in self._inspector.get_property_names(bean_class):
            self.remove_field(template, name, prefix)

        logger.info(f"Removed form for {bean_class.__name__} with prefix {prefix!r}")

    @staticmethod
    def _erroneous_values(bean: Any) -> dict[str, list[str] | None]:
        """Collect the values that made a validated bean fail validation."""
        erroneous: dict[str, list[str] | None] = {}
        for error in getattr(bean, "validation_errors", None) or ():
            subject = getattr(error, "subject", None)
            value = getattr(error, "erroneous_value", None)
            if subject is not None and value is not None and subject not in erroneous:
                erroneous[subject] = to_string_values(value)
        return erroneous

    # =========================================================================
    # Fields
    # =========================================================================

    def generate_field(
        self,
        template: BaseTemplate | None,
        property_or_name: ConstrainedProperty | str | None,
        values: ValueSet | None = None,
        prefix: str | None = None,
        property_type: Any = None,
    ) -> list[str]:
        touched = self._generate_field(
            template, None, property_or_name, values, prefix, property_type, replace=False
        )
        if template is not None:
            template.add_generated_values(touched)
        return touched

    def replace_field(
        self,
        template: BaseTemplate | None,
        template_field_name: str,
        property_or_name: ConstrainedProperty | str | None,
        values: ValueSet | None = None,
        prefix: str | None = None,
        property_type: Any = None,
    ) -> list[str]:
        touched = self._generate_field(
            template,
            template_field_name or None,
            property_or_name,
            values,
            prefix,
            property_type,
            replace=True,
        )
        if template is not None:
            template.add_generated_values(touched)
        return touched

    def remove_field(self, template: BaseTemplate | None, name: str, prefix: str | None = None) -> None:
        if template is None or not name:
            return

        self.remove_template_field(template, effective_name(name, prefix))

    def remove_template_field(self, template: BaseTemplate | None, template_field_name: str) -> None:
        if template is None or not template_field_name:
            return

        for kind in FieldKind:
            value_id = kind.tag(template_field_name)
            if template.is_value_set(value_id) or template.is_value_generated(value_id):
                template.remove_value(value_id)
                logger.debug(f"Removed {value_id}")

    def _generate_field(
        self,
        template: BaseTemplate | None,
        template_field_name: str | None,
        property_or_name: ConstrainedProperty | str | None,
        values: ValueSet | None,
        prefix: str | None,
        property_type: Any,
        replace: bool,
    ) -> list[str]:
        touched: list[str] = []

        if template is None or property_or_name is None:
            return touched

        if isinstance(property_or_name, ConstrainedProperty):
            prop = property_or_name
            field_name = prop.name
        elif isinstance(property_or_name, str):
            prop = None
            field_name = property_or_name
        else:
            raise TypeError(
                f"Expected a ConstrainedProperty or a field name, got {type(property_or_name).__name__}"
            )

        if not field_name:
            return touched

        name = effective_name(field_name, prefix)
        context = _FieldContext(
            template=template,
            field_name=field_name,
            name=name,
            template_field_name=template_field_name or name,
            prop=prop,
            property_type=property_type,
            values=normalize_values(values),
        )

        for kind, generator in self._generators():
            tag = kind.tag(context.template_field_name)
            if not template.has_value_id(tag):
                continue
            if not replace and self._is_bound(template, tag):
                logger.debug(f"Skipping {tag}, it already has content")
                continue
            if kind is FieldKind.DISPLAY and template.has_value_id(
                FieldKind.SECRET.tag(context.template_field_name)
            ):
                continue
            if replace and kind in (FieldKind.RADIO, FieldKind.CHECKBOX, FieldKind.SELECT):
                template.blank_value(tag)

            generator(context, tag)
            touched.append(tag)
            logger.debug(f"Generated {tag}")

        return touched

    def _generators(self) -> list[tuple[FieldKind, Callable[[_FieldContext, str], None]]]:
        return [
            (FieldKind.HIDDEN, self._generate_hidden),
            (FieldKind.INPUT, self._generate_input),
            (FieldKind.SECRET, self._generate_secret),
            (FieldKind.TEXTAREA, self._generate_textarea),
            (FieldKind.RADIO, self._generate_radio),
            (FieldKind.CHECKBOX, self._generate_checkbox),
            (FieldKind.SELECT, self._generate_select),
            (FieldKind.DISPLAY, self._generate_display),
        ]

    @staticmethod
    def _is_bound(template: BaseTemplate, tag: str) -> bool:
        if template.is_value_generated(tag):
            return True
        return template.is_value_set(tag) and bool(template.get_value(tag))

    # =========================================================================
    # Field kinds
    # =========================================================================

    def _generate_hidden(self, context: _FieldContext, tag: str) -> None:
        template = context.template
        value = self._text_value(context)
        if value is not None and context.prop is not None and context.prop.max_length is not None:
            value = value[: context.prop.max_length]

        attributes = self._attributes(context, FieldKind.HIDDEN, value)
        if value is not None:
            attributes += self.ATTRIBUTE_VALUE.format(value=template.encode(value))

        template.set_value(
            tag, self.MARKUP_HIDDEN.format(name=template.encode(context.name), attributes=attributes)
        )

    def _generate_input(self, context: _FieldContext, tag: str) -> None:
        self._generate_text_input(context, tag, FieldKind.INPUT, echo_value=True)

    def _generate_secret(self, context: _FieldContext, tag: str) -> None:
        self._generate_text_input(context, tag, FieldKind.SECRET, echo_value=False)

    def _generate_text_input(
        self, context: _FieldContext, tag: str, kind: FieldKind, echo_value: bool
    ) -> None:
        template = context.template
        prop = context.prop
        value = self._text_value(context)

        attributes = self._attributes(context, kind, value)
        if echo_value and value is not None:
            attributes += self.ATTRIBUTE_VALUE.format(value=template.encode(value))

        if prop is not None:
            min_length = prop.required_min_length()
            if min_length > 0:
                attributes += self.ATTRIBUTE_MINLENGTH.format(length=min_length)
            if prop.max_length is not None:
                attributes += self.ATTRIBUTE_MAXLENGTH.format(length=prop.max_length)
        attributes += self._constraint_attributes(context)

        input_type = "password"
        if kind is FieldKind.INPUT:
            input_type = "text"
            if prop is not None and prop.email:
                input_type = "email"
            elif prop is not None and prop.url:
                input_type = "url"

        template.set_value(
            tag,
            self.MARKUP_INPUT.format(
                type=input_type, name=template.encode(context.name), attributes=attributes
            ),
        )

    def _generate_textarea(self, context: _FieldContext, tag: str) -> None:
        template = context.template
        value = self._text_value(context)

        attributes = self._attributes(context, FieldKind.TEXTAREA, value)
        attributes += self._constraint_attributes(context)

        template.set_value(
            tag,
            self.MARKUP_TEXTAREA.format(
                name=template.encode(context.name),
                attributes=attributes,
                value="" if value is None else template.encode(value),
            ),
        )

    def _generate_radio(self, context: _FieldContext, tag: str) -> None:
        self._generate_collection(context, tag, FieldKind.RADIO)

    def _generate_checkbox(self, context: _FieldContext, tag: str) -> None:
        self._generate_collection(context, tag, FieldKind.CHECKBOX)

    def _generate_collection(self, context: _FieldContext, tag: str, kind: FieldKind) -> None:
        template = context.template
        active = self._option_values(context, kind)
        source = self._resolve_options(context)
        encoded_name = template.encode(context.name)

        if source is None:
            # a single control that is checked by a boolean value
            attributes = self._attributes(context, kind, self._text_value(context))
            if active and convert_to_boolean(active[0], self._truthy_values):
                attributes += self.VALUE_CHECKED
            attributes += self._constraint_attributes(context)

            template.set_value(
                tag,
                self.MARKUP_INPUT.format(type=kind.value, name=encoded_name, attributes=attributes),
            )
            return

        def control(option: ResolvedOption) -> str:
            attributes = self._attributes(context, kind, option.value)
            attributes += self.ATTRIBUTE_VALUE.format(value=template.encode(option.value))
            if option.selected:
                attributes += self.VALUE_CHECKED
            attributes += self._constraint_attributes(context)
            return self.MARKUP_INPUT.format(type=kind.value, name=encoded_name, attributes=attributes)

        rendered = self._options.render(
            template,
            kind,
            context.field_name,
            context.name,
            context.template_field_name,
            source,
            active,
            control,
        )
        template.set_value(tag, rendered.fragment)

    def _generate_select(self, context: _FieldContext, tag: str) -> None:
        template = context.template
        multiple = self._is_multiple(context)
        active = self._option_values(context, FieldKind.SELECT)
        source = self._resolve_options(context) or ListOptionSource([])

        def control(option: ResolvedOption) -> str:
            return self.MARKUP_OPTION.format(
                value=template.encode(option.value),
                attributes=self.VALUE_SELECTED if option.selected else "",
                label=option.label,
            )

        rendered = self._options.render(
            template,
            FieldKind.SELECT,
            context.field_name,
            context.name,
            context.template_field_name,
            source,
            active,
            control,
            label_in_control=True,
        )

        attributes = self._attributes(context, FieldKind.SELECT, first_value(active))
        if multiple:
            attributes += self.ATTRIBUTE_MULTIPLE
        attributes += self._constraint_attributes(context)

        template.set_value(
            tag,
            self.MARKUP_SELECT.format(
                name=template.encode(context.name),
                attributes=attributes,
                options=rendered.fragment,
            ),
        )

    def _generate_display(self, context: _FieldContext, tag: str) -> None:
        template = context.template
        source = self._resolve_options(context)

        if source is not None:
            # the same values the option control of the field checks
            active = self._option_values(context, self._display_kind(context)) or []
            labels = self._options.selected_labels(
                template, context.field_name, context.template_field_name, source, active
            )
            entries = [
                self.MARKUP_DISPLAY.format(
                    attributes=self._attributes(context, FieldKind.DISPLAY, value), value=label
                )
                for value, label in zip(active, labels)
            ]
            template.set_value(tag, "".join(entries))
            return

        defaults = context.prop.default_values() if context.prop is not None else None
        default = defaults[0] if defaults else None
        if context.values:
            displayed = [default if value is None else value for value in context.values]
        elif defaults:
            displayed = list(defaults)
        else:
            displayed = [None]

        entries = []
        for value in displayed:
            attributes = self._attributes(context, FieldKind.DISPLAY, value)
            text = "" if value is None else template.encode(value)
            entries.append(self.MARKUP_DISPLAY.format(attributes=attributes, value=text))

        template.set_value(tag, "".join(entries))

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _text_value(context: _FieldContext) -> str | None:
        value = first_value(context.values)
        if value is None and context.prop is not None:
            defaults = context.prop.default_values()
            if defaults:
                value = defaults[0]
        return value

    @staticmethod
    def _is_multiple(context: _FieldContext) -> bool:
        """Whether a select accepts several values."""
        if context.prop is not None and context.prop.multiple:
            return True
        submitted = [value for value in context.values or () if value is not None]
        return len(submitted) > 1

    def _option_values(self, context: _FieldContext, kind: FieldKind) -> list[str] | None:
        """The values an option control of the given kind marks as active."""
        if kind is FieldKind.SELECT:
            return self._active_values(context, single_value=not self._is_multiple(context))
        return self._active_values(context, single_value=kind is FieldKind.RADIO)

    @staticmethod
    def _display_kind(context: _FieldContext) -> FieldKind:
        """The option control a display mirrors, a checkbox list by default."""
        for kind in (FieldKind.RADIO, FieldKind.CHECKBOX, FieldKind.SELECT):
            if context.template.has_value_id(kind.tag(context.template_field_name)):
                return kind
        return FieldKind.CHECKBOX

    @staticmethod
    def _active_values(context: _FieldContext, single_value: bool) -> list[str] | None:
        values = context.values
        active: list[str] | None = None
        if values:
            if single_value:
                if values[0] is not None:
                    active = [values[0]]
            else:
                active = [value for value in values if value is not None]

        if active is None and context.prop is not None and context.prop.has_default_value:
            defaults = context.prop.default_values() or []
            active = defaults[:1] if single_value else defaults
        return active

    @staticmethod
    def _resolve_options(context: _FieldContext) -> BaseOptionSource | None:
        """Snapshot the option source of a field, None for free-form fields."""
        source = None
        if context.prop is not None and context.prop.in_list:
            source = context.prop.options
        elif context.property_type is not None:
            source = option_source_for_type(context.property_type)

        if source is None:
            return None

        try:
            return ListOptionSource(source.options())
        except Exception as e:
            logger.error(f"Unable to obtain the options of field {context.name}: {e}", exc_info=True)
            raise FormBuilderError(f"Unable to obtain the options of field '{context.name}': {e}") from e

    def _attributes(self, context: _FieldContext, kind: FieldKind, value: str | None) -> str:
        """Collect the attributes the template author provided for a field."""
        template = context.template
        block = kind.attributes_block(context.template_field_name)
        if template.has_block(block):
            with placeholders(
                template,
                {
                    ID_FORM_NAME: template.encode(context.name),
                    ID_FORM_VALUE: None if value is None else template.encode(value),
                },
            ):
                return sanitize_attributes(template.get_block(block))

        tag = kind.tag(context.template_field_name)
        if template.has_default_value(tag):
            return sanitize_attributes(template.get_default_value(tag))
        return ""

    def _constraint_attributes(self, context: _FieldContext) -> str:
        attributes = ""
        if context.prop is not None:
            if context.prop.not_null:
                attributes += self.ATTRIBUTE_REQUIRED
            if not context.prop.editable:
                attributes += self.ATTRIBUTE_DISABLED
        return attributes

    # =========================================================================
    # Parameters
    # =========================================================================

    def select_parameter(self, template: BaseTemplate | None, name: str, values: ValueSet | None) -> list[str]:
        touched: list[str] = []

        normalized = normalize_values(values)
        if template is None or not name or not normalized:
            return touched

        for value in normalized:
            if value is None:
                continue

            value_id = f"{name}:{value}{SUFFIX_SELECTED}"
            if template.has_value_id(value_id):
                template.set_value(value_id, self.VALUE_SELECTED)
                touched.append(value_id)

            value_id = f"{name}:{value}{SUFFIX_CHECKED}"
            if template.has_value_id(value_id):
                template.set_value(value_id, self.VALUE_CHECKED)
                touched.append(value_id)

            value_id = f"{name}{SUFFIX_CHECKED}"
            if (
                template.has_value_id(value_id)
                and value_id not in touched
                and convert_to_boolean(value, self._truthy_values)
            ):
                template.set_value(value_id, self.VALUE_CHECKED)
                touched.append(value_id)

        template.add_generated_values(touched)
        return touched

    def unselect_parameter(self, template: BaseTemplate | None, name: str, values: ValueSet | None) -> None:
        if template is None or not name:
            return

        value_id = f"{name}{SUFFIX_CHECKED}"
        if template.has_value_id(value_id):
            template.remove_value(value_id)

        for value in normalize_values(values) or ():
            if value is None:
                continue

            for suffix in (SUFFIX_SELECTED, SUFFIX_CHECKED):
                value_id = f"{name}:{value}{suffix}"
                if template.has_value_id(value_id):
                    template.remove_value(value_id)
