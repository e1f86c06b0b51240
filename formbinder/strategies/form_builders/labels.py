"""Option label resolution."""

import logging

from formbinder.interfaces.form_builder import PREFIX_FORM_LABEL
from formbinder.interfaces.template import BaseTemplate

logger = logging.getLogger(__name__)


class LabelResolver:
    """Finds the display label of a field value.

    Labels are looked up in priority order:

    1. The label bundles registered on the template, keyed by
       ``"<field name>:<value>"`` with the unprefixed field name.
    2. A ``form:label:<template field name>:<value>`` block in the template.
    3. The label declared next to the value in the option list.
    4. The value itself.

    Everything except template blocks is HTML encoded, blocks are authored
    markup and are used verbatim.
    """

    def resolve(
        self,
        template: BaseTemplate,
        field_name: str,
        template_field_name: str,
        value: str,
        declared_label: str | None = None,
    ) -> str:
        """Resolve the label of a value.

        Args:
            template: The template that holds label bundles and blocks.
            field_name: The field name without prefix.
            template_field_name: The name the field's tags are addressed by.
            value: The raw option value.
            declared_label: The label from the option list, if any.

        Returns:
            The encoded label.
        """
        label_id = f"{field_name}:{value}"
        for bundle in template.label_bundles:
            label = bundle.get(label_id)
            if label is not None:
                return template.encode(label)

        label_block = f"{PREFIX_FORM_LABEL}{template_field_name}:{value}"
        if template.has_block(label_block):
            return template.get_block(label_block)

        if declared_label is not None:
            return template.encode(declared_label)

        return template.encode(value)
