"""Component Factory for strategy instantiation.

The Factory Pattern allows the library to instantiate different
strategy implementations at runtime based on configuration or
environment variables.
"""

import logging
from pathlib import Path

from formbinder.core.config import Settings, get_settings
from formbinder.interfaces.bean import BaseBeanInspector
from formbinder.interfaces.form_builder import BaseFormBuilder
from formbinder.interfaces.template import BaseTemplate
from formbinder.strategies.beans import ModelInspector
from formbinder.strategies.form_builders import HtmlFormBuilder
from formbinder.strategies.template_engine import MarkupTemplate

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating component instances based on configuration.

    Example:
        ```python
        factory = ComponentFactory(get_settings())

        builder = factory.get_form_builder()
        template = factory.load_template("templates/account.html")
        builder.generate_form(template, Account)
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Library settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._form_builder_cache: BaseFormBuilder | None = None
        self._bean_inspector_cache: BaseBeanInspector | None = None

    def get_bean_inspector(self, inspector_type: str | None = None) -> BaseBeanInspector:
        """Get a bean inspector instance based on the specified type.

        Args:
            inspector_type: The inspector type to instantiate. If None, uses settings.

        Returns:
            A BaseBeanInspector implementation instance.

        Raises:
            ValueError: If the inspector type is unknown.
        """
        if self._bean_inspector_cache is None or inspector_type is not None:
            inspector_type = inspector_type or self._settings.bean_inspector_type

            logger.info(f"Instantiating bean inspector: {inspector_type}")

            match inspector_type:
                case "model":
                    self._bean_inspector_cache = ModelInspector()
                case _:
                    raise ValueError(
                        f"Unknown bean inspector type: {inspector_type}. "
                        f"Valid options: 'model'"
                    )

        return self._bean_inspector_cache

    def get_form_builder(self, builder_type: str | None = None) -> BaseFormBuilder:
        """Get a form builder instance based on the specified type.

        Args:
            builder_type: The form builder type to instantiate. If None, uses settings.

        Returns:
            A BaseFormBuilder implementation instance.

        Raises:
            ValueError: If the form builder type is unknown.
        """
        if self._form_builder_cache is None or builder_type is not None:
            builder_type = builder_type or self._settings.form_builder_type

            logger.info(f"Instantiating form builder: {builder_type}")

            match builder_type:
                case "html":
                    self._form_builder_cache = HtmlFormBuilder(
                        inspector=self.get_bean_inspector(),
                        truthy_values=self._settings.truthy_values,
                    )
                case _:
                    raise ValueError(
                        f"Unknown form builder type: {builder_type}. "
                        f"Valid options: 'html'"
                    )

        return self._form_builder_cache

    def create_template(self, content: str, name: str = "") -> BaseTemplate:
        """Parse template content into a new template instance.

        Templates carry per-render state, so they are never cached.
        """
        return MarkupTemplate(content, name=name)

    def load_template(self, file_path: str | Path) -> BaseTemplate:
        """Load a template file with the configured encoding.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            TemplateError: If the template can't be parsed.
        """
        return MarkupTemplate.from_file(file_path, encoding=self._settings.template_encoding)

    def clear_cache(self) -> None:
        """Clear all cached component instances.

        This forces new instances to be created on next access.
        Useful for testing or when settings change.
        """
        self._form_builder_cache = None
        self._bean_inspector_cache = None
        logger.debug("Component factory cache cleared")


# Global factory instance
_factory: ComponentFactory | None = None


def get_factory() -> ComponentFactory:
    """Get or create the global ComponentFactory instance.

    Returns:
        The singleton ComponentFactory instance.
    """
    global _factory
    if _factory is None:
        _factory = ComponentFactory()
    return _factory
