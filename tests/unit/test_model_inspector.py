"""Unit tests for the pydantic and dataclass bean inspector."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

import pytest
from pydantic import BaseModel, Field, computed_field

from formbinder.interfaces.bean import BeanAccessError
from formbinder.strategies.beans import ModelInspector


class Color(str, Enum):
    RED = "red"
    GREEN = "green"


class Account(BaseModel):
    login: str = Field(default="", max_length=12)
    password: str = ""
    color: Color = Color.GREEN
    newsletter: bool = False
    tags: list[str] = Field(default_factory=list, json_schema_extra={"options": ["a", "b"]})

    @computed_field
    @property
    def display_name(self) -> str:
        return self.login.title()


@dataclass
class Profile:
    name: str = field(default="", metadata={"max_length": 20, "not_null": True})
    answer: Literal["yes", "no"] = "no"
    hobbies: list[str] = field(default_factory=list)


@dataclass
class Registration:
    email: str


@dataclass
class Draft:
    title: "UndefinedType" = ""  # noqa: F821


# =============================================================================
# Pydantic Model Tests
# =============================================================================


class TestModelInspectorPydantic:
    """Test suite for inspecting pydantic models."""

    @pytest.fixture
    def inspector(self):
        """Create a model inspector."""
        return ModelInspector()

    def test_is_bean_class(self, inspector):
        """Test which classes are recognized as beans."""
        assert inspector.is_bean_class(Account)
        assert inspector.is_bean_class(Profile)
        assert not inspector.is_bean_class(dict)
        assert not inspector.is_bean_class("Account")
        assert inspector.is_bean(Account())
        assert not inspector.is_bean(Account)

    def test_properties_in_declaration_order(self, inspector):
        """Test that fields come first, then computed fields."""
        assert inspector.get_property_names(Account) == [
            "login",
            "password",
            "color",
            "newsletter",
            "tags",
            "display_name",
        ]

    def test_field_constraints(self, inspector):
        """Test that pydantic constraints become property constraints."""
        properties = {prop.name: prop for prop in inspector.get_properties(Account)}

        login = properties["login"].constrained
        assert login.max_length == 12
        assert login.default_value == ""
        assert not login.multiple

        color = properties["color"].constrained
        assert [option.value for option in color.options.options()] == ["red", "green"]
        assert color.default_values() == ["green"]

        tags = properties["tags"].constrained
        assert [option.value for option in tags.options.options()] == ["a", "b"]
        assert tags.multiple
        assert tags.default_value == []

        assert properties["display_name"].constrained is None
        assert properties["display_name"].property_type is str

    def test_instantiate_without_validation(self, inspector):
        """Test that model classes are instantiated with their defaults."""
        bean = inspector.instantiate(Account)

        assert isinstance(bean, Account)
        assert bean.color is Color.GREEN

    def test_property_values(self, inspector):
        """Test reading fields and computed fields."""
        bean = Account(login="gbevin", tags=["a"])

        assert inspector.get_property_value(bean, "login") == "gbevin"
        assert inspector.get_property_value(bean, "tags") == ["a"]
        assert inspector.get_property_value(bean, "display_name") == "Gbevin"

    def test_failing_accessor_raises(self, inspector):
        """Test that accessor failures are wrapped in BeanAccessError."""

        class Broken(BaseModel):
            login: str = "gbevin"

            @computed_field
            @property
            def summary(self) -> str:
                raise RuntimeError("summary unavailable")

        with pytest.raises(BeanAccessError, match="summary"):
            inspector.get_property_value(Broken(), "summary")


# =============================================================================
# Dataclass Tests
# =============================================================================


class TestModelInspectorDataclass:
    """Test suite for inspecting dataclasses."""

    @pytest.fixture
    def inspector(self):
        """Create a model inspector."""
        return ModelInspector()

    def test_metadata_constraints(self, inspector):
        """Test that field metadata becomes property constraints."""
        properties = {prop.name: prop for prop in inspector.get_properties(Profile)}

        name = properties["name"].constrained
        assert name.max_length == 20
        assert name.not_null

        answer = properties["answer"].constrained
        assert [option.value for option in answer.options.options()] == ["yes", "no"]
        assert answer.default_value == "no"

        hobbies = properties["hobbies"].constrained
        assert hobbies.multiple
        assert hobbies.options is None
        assert hobbies.default_value == []

    def test_instantiate(self, inspector):
        """Test that dataclasses with defaults are instantiated."""
        assert inspector.instantiate(Profile) == Profile()

    def test_instantiate_with_required_fields_raises(self, inspector):
        """Test that classes needing arguments raise BeanAccessError."""
        with pytest.raises(BeanAccessError, match="Registration"):
            inspector.instantiate(Registration)

    def test_unsupported_class_raises(self, inspector):
        """Test that other classes are rejected."""
        with pytest.raises(TypeError):
            inspector.get_properties(dict)

    def test_unresolved_annotations_are_logged(self, inspector, caplog):
        """Test that unresolvable type hints fall back to the raw annotations with a warning."""
        with caplog.at_level(logging.WARNING, logger="formbinder.strategies.beans.model_inspector"):
            properties = inspector.get_properties(Draft)

        assert [prop.name for prop in properties] == ["title"]
        assert properties[0].property_type == "UndefinedType"
        assert properties[0].constrained.options is None
        assert any(
            record.levelno == logging.WARNING and "Draft" in record.getMessage() and record.exc_info
            for record in caplog.records
        )
