"""Bean inspection interfaces.

Beans are the objects whose properties are turned into form fields. The
inspector reports the ordered properties of a bean class, their constraints
and their current values.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from formbinder.interfaces.form_builder import FormBuilderError


@dataclass(frozen=True)
class BeanProperty:
    """A property of a bean class.

    Attributes:
        name: The property name.
        property_type: The declared type of the property.
        constrained: The ConstrainedProperty describing its constraints, or
            None when the property isn't constrained.
    """

    name: str
    property_type: Any = None
    constrained: Any = None


class BeanAccessError(FormBuilderError):
    """Exception raised when a bean can't be instantiated or read."""

    pass


class BaseBeanInspector(ABC):
    """Abstract base class for bean inspection strategies."""

    @abstractmethod
    def is_bean_class(self, bean_class: Any) -> bool:
        """Check whether a class is a bean class this inspector understands."""

    @abstractmethod
    def instantiate(self, bean_class: type) -> Any:
        """Create an instance of a bean class without any input values.

        Raises:
            BeanAccessError: If the class can't be instantiated.
        """

    @abstractmethod
    def get_properties(self, bean_class: type) -> list[BeanProperty]:
        """Return the properties of a bean class in declaration order."""

    @abstractmethod
    def get_property_value(self, bean: Any, name: str) -> Any:
        """Read the current value of one property of a bean instance.

        Raises:
            BeanAccessError: If the property accessor fails.
        """

    def get_property_names(self, bean_class: type) -> list[str]:
        """Return the property names of a bean class in declaration order."""
        return [prop.name for prop in self.get_properties(bean_class)]

    def is_bean(self, bean: Any) -> bool:
        """Check whether an object is an instance of a supported bean class."""
        return not isinstance(bean, type) and self.is_bean_class(type(bean))
