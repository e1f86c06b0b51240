"""Unit tests for the value conversion helpers."""

from datetime import date
from enum import Enum

import pytest

from formbinder.strategies.form_builders.values import (
    convert_to_boolean,
    effective_name,
    first_value,
    normalize_values,
    sanitize_attributes,
    to_string,
    to_string_values,
)


class Color(Enum):
    RED = "red"
    GREEN = "green"


class TestValueHelpers:
    """Test suite for value normalization."""

    def test_effective_name(self):
        """Test that prefixes are prepended textually."""
        assert effective_name("name", "user.") == "user.name"
        assert effective_name("name", "") == "name"
        assert effective_name("name", None) == "name"

    def test_to_string(self):
        """Test conversion of single values."""
        assert to_string(Color.RED) == "red"
        assert to_string(True) == "true"
        assert to_string(False) == "false"
        assert to_string(12) == "12"
        assert to_string(date(2024, 2, 29)) == "2024-02-29"

    def test_to_string_values(self):
        """Test conversion of bean property values."""
        assert to_string_values(None) is None
        assert to_string_values("abc") == ["abc"]
        assert to_string_values(3) == ["3"]
        assert to_string_values([Color.RED, None, Color.GREEN]) == ["red", "green"]
        assert to_string_values({"a": 1, "b": 2}) == ["a", "b"]

    def test_normalize_values(self):
        """Test that submitted values keep their positions."""
        assert normalize_values(None) is None
        assert normalize_values("one") == ["one"]
        assert normalize_values(["one", None, 2]) == ["one", None, "2"]
        assert normalize_values([]) == []

    def test_first_value(self):
        """Test that only a present first value is returned."""
        assert first_value(["a", "b"]) == "a"
        assert first_value([None, "b"]) is None
        assert first_value(None) is None
        assert first_value([]) is None

    @pytest.mark.parametrize("token", ["true", "T", "1", "y", "Yes", "on", True])
    def test_truthy_tokens(self, token):
        """Test the tokens that count as checked."""
        assert convert_to_boolean(token) is True

    @pytest.mark.parametrize("token", ["false", "0", "no", "maybe", "", None, False])
    def test_falsy_tokens(self, token):
        """Test that anything else counts as unchecked."""
        assert convert_to_boolean(token) is False

    def test_custom_truthy_tokens(self):
        """Test that the truthy vocabulary can be replaced."""
        assert convert_to_boolean("ja", {"ja"}) is True
        assert convert_to_boolean("true", {"ja"}) is False

    def test_sanitize_attributes(self):
        """Test that attributes get a single leading space."""
        assert sanitize_attributes('  class="x" ') == ' class="x"'
        assert sanitize_attributes("   ") == ""
        assert sanitize_attributes(None) == ""
