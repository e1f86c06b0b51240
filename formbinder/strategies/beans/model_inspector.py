"""Bean inspection for pydantic models and dataclasses.

Pydantic models describe their constraints through ``Field`` arguments, for
example ``Field(max_length=20, json_schema_extra={"options": ["a", "b"]})``.
Dataclasses describe them through field metadata, for example
``field(default="", metadata={"max_length": 20})``.
"""

import dataclasses
import logging
import typing
from collections.abc import Mapping
from typing import Any, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from formbinder.interfaces.bean import BaseBeanInspector, BeanAccessError, BeanProperty
from formbinder.strategies.form_builders.models import ConstrainedProperty
from formbinder.strategies.options import option_source_for_type

logger = logging.getLogger(__name__)

# Constraint keys that are copied from extras and metadata as-is
_CONSTRAINT_KEYS = (
    "max_length",
    "min_length",
    "not_null",
    "not_empty",
    "editable",
    "email",
    "url",
    "multiple",
)

_COLLECTION_TYPES = (list, tuple, set, frozenset)


class ModelInspector(BaseBeanInspector):
    """Inspects pydantic models and dataclasses as beans.

    Pydantic computed fields are reported as properties too, without
    constraints, since they can only be read.
    """

    def is_bean_class(self, bean_class: Any) -> bool:
        if not isinstance(bean_class, type):
            return False
        return issubclass(bean_class, BaseModel) or dataclasses.is_dataclass(bean_class)

    def instantiate(self, bean_class: type) -> Any:
        if issubclass(bean_class, BaseModel):
            # fields without a default stay unset
            return bean_class.model_construct()

        try:
            return bean_class()
        except Exception as e:
            logger.error(f"Unable to instantiate {bean_class.__name__}: {e}")
            raise BeanAccessError(
                f"Bean class {bean_class.__name__} can't be instantiated without arguments: {e}"
            ) from e

    def get_properties(self, bean_class: type) -> list[BeanProperty]:
        if issubclass(bean_class, BaseModel):
            properties = [
                BeanProperty(
                    name=name,
                    property_type=info.annotation,
                    constrained=self._constrain_model_field(name, info),
                )
                for name, info in bean_class.model_fields.items()
            ]
            properties.extend(
                BeanProperty(name=name, property_type=info.return_type)
                for name, info in bean_class.model_computed_fields.items()
            )
            return properties

        if dataclasses.is_dataclass(bean_class):
            try:
                hints = typing.get_type_hints(bean_class)
            except Exception as e:
                # unresolved forward references, the raw annotations are used instead
                logger.warning(
                    f"Unable to resolve type hints of {bean_class.__name__}: {e}", exc_info=True
                )
                hints = {}
            return [
                BeanProperty(
                    name=f.name,
                    property_type=hints.get(f.name, f.type),
                    constrained=self._constrain_dataclass_field(f, hints.get(f.name, f.type)),
                )
                for f in dataclasses.fields(bean_class)
            ]

        raise TypeError(f"{bean_class.__name__} is not a pydantic model or a dataclass")

    def get_property_value(self, bean: Any, name: str) -> Any:
        try:
            if isinstance(bean, BaseModel) and name in type(bean).model_fields:
                return bean.__dict__.get(name)
            return getattr(bean, name)
        except Exception as e:
            logger.error(f"Reading property {name} of {type(bean).__name__} failed: {e}", exc_info=True)
            raise BeanAccessError(
                f"Unable to read property '{name}' of {type(bean).__name__}: {e}"
            ) from e

    # =========================================================================
    # Constraints
    # =========================================================================

    def _constrain_model_field(self, name: str, info: FieldInfo) -> ConstrainedProperty:
        constraints: dict[str, Any] = {}

        # annotated-types constraints such as MaxLen and MinLen
        for item in info.metadata:
            for key in ("max_length", "min_length"):
                length = getattr(item, key, None)
                if isinstance(length, int):
                    constraints[key] = length

        extra = info.json_schema_extra if isinstance(info.json_schema_extra, Mapping) else {}
        default = None if info.is_required() else info.get_default(call_default_factory=True)

        return self._constrain(name, info.annotation, default, {**constraints, **extra})

    def _constrain_dataclass_field(self, f: dataclasses.Field, annotation: Any) -> ConstrainedProperty:
        if f.default is not dataclasses.MISSING:
            default = f.default
        elif f.default_factory is not dataclasses.MISSING:
            default = f.default_factory()
        else:
            default = None

        return self._constrain(f.name, annotation, default, f.metadata)

    @staticmethod
    def _constrain(
        name: str, annotation: Any, default: Any, constraints: Mapping[str, Any]
    ) -> ConstrainedProperty:
        values = {key: constraints[key] for key in _CONSTRAINT_KEYS if key in constraints}

        options = constraints.get("options")
        if options is None:
            options = option_source_for_type(annotation)

        if "multiple" not in values:
            values["multiple"] = _is_collection(annotation)

        return ConstrainedProperty(name=name, default_value=default, options=options, **values)


def _is_collection(annotation: Any) -> bool:
    origin = get_origin(annotation)
    if origin in _COLLECTION_TYPES:
        return True
    if origin is not None:
        return any(_is_collection(arg) for arg in get_args(annotation) if arg is not type(None))
    return isinstance(annotation, type) and issubclass(annotation, _COLLECTION_TYPES)
