"""Option list rendering for radio buttons, checkbox lists and selects."""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from formbinder.interfaces.form_builder import ID_FORM_FIELD, ID_FORM_LABEL, ID_FORM_NAME, ID_FORM_VALUE
from formbinder.interfaces.options import BaseOptionSource, OptionEntry
from formbinder.interfaces.template import BaseTemplate
from formbinder.strategies.form_builders.labels import LabelResolver
from formbinder.strategies.form_builders.models import FieldKind, RenderedOptions, ResolvedOption

logger = logging.getLogger(__name__)

ControlFactory = Callable[[ResolvedOption], str]


@contextmanager
def placeholders(template: BaseTemplate, values: dict[str, str | None]) -> Iterator[None]:
    """Temporarily fill in placeholders that are declared by the template.

    Values that are None are left out. On exit every placeholder gets back
    the content it had before, so the context can be nested.
    """
    previous: dict[str, str | None] = {}
    for value_id, value in values.items():
        if value is not None and template.has_value_id(value_id):
            previous[value_id] = template.get_value(value_id) if template.is_value_set(value_id) else None
            template.set_value(value_id, value)
    try:
        yield
    finally:
        for value_id, value in previous.items():
            if value is None:
                template.remove_value(value_id)
            else:
                template.set_value(value_id, value)


class OptionRenderer:
    """Renders an option list into one markup fragment.

    Each option is rendered by a control factory that the form builder
    supplies. When the template contains a block named after the field tag
    (optionally suffixed with ``:<value>``), that block lays out the option
    instead, with the ``form:field``, ``form:label``, ``form:name`` and
    ``form:value`` placeholders filled in.
    """

    def __init__(self, labels: LabelResolver | None = None) -> None:
        """Initialize the renderer.

        Args:
            labels: The label resolver to use. Defaults to a new resolver.
        """
        self._labels = labels or LabelResolver()

    def render(
        self,
        template: BaseTemplate,
        kind: FieldKind,
        field_name: str,
        name: str,
        template_field_name: str,
        source: BaseOptionSource,
        selected_values: list[str] | None,
        control: ControlFactory,
        label_in_control: bool = False,
    ) -> RenderedOptions:
        """Render the options of a field.

        Args:
            template: The template the field is rendered into.
            kind: The kind of field.
            field_name: The field name without prefix, used for label lookups.
            name: The effective field name that is submitted.
            template_field_name: The name the field's tags are addressed by.
            source: The option source of the field.
            selected_values: The active values.
            control: Builds the markup of one resolved option.
            label_in_control: Whether the control markup already contains
                the label; otherwise the label follows the control.

        Returns:
            The rendered fragment with the labels of the active values.
        """
        field = kind.tag(template_field_name)
        active = selected_values or []
        fragments = []

        for entry in source.options():
            if not isinstance(entry, OptionEntry):
                continue

            option = ResolvedOption(
                value=entry.value,
                label=self._labels.resolve(
                    template, field_name, template_field_name, entry.value, entry.label
                ),
                selected=entry.value in active,
            )

            with placeholders(
                template,
                {ID_FORM_NAME: template.encode(name), ID_FORM_VALUE: template.encode(option.value)},
            ):
                markup = control(option)

                layout = self._custom_layout(template, field, option.value)
                if layout is not None:
                    with placeholders(template, {ID_FORM_FIELD: markup, ID_FORM_LABEL: option.label}):
                        fragments.append(template.get_block(layout))
                elif label_in_control:
                    fragments.append(markup)
                else:
                    fragments.append(markup + option.label)

        rendered = RenderedOptions(
            fragment="".join(fragments),
            selected_labels=self.selected_labels(
                template, field_name, template_field_name, source, active
            ),
        )

        logger.debug(
            f"Rendered {len(fragments)} options for {field}, "
            f"{len(rendered.selected_labels)} selected"
        )
        return rendered

    def selected_labels(
        self,
        template: BaseTemplate,
        field_name: str,
        template_field_name: str,
        source: BaseOptionSource,
        selected_values: list[str] | None,
    ) -> list[str]:
        """Resolve the labels of the active values in selection order.

        Values that aren't part of the option list are labelled like any
        other value, falling back to the raw value.
        """
        return [
            self._labels.resolve(
                template, field_name, template_field_name, value, source.declared_label(value)
            )
            for value in selected_values or ()
        ]

    @staticmethod
    def _custom_layout(template: BaseTemplate, field: str, value: str) -> str | None:
        for block_id in (f"{field}:{value}", field):
            if template.has_block(block_id):
                return block_id
        return None
