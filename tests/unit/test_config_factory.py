"""Unit tests for settings, logging setup and the component factory."""

import logging

import pytest

from formbinder.core import config, factory
from formbinder.core.config import Settings, get_settings
from formbinder.core.factory import ComponentFactory, get_factory
from formbinder.core.logging_config import get_logger, setup_logging
from formbinder.strategies.beans import ModelInspector
from formbinder.strategies.form_builders import HtmlFormBuilder
from formbinder.strategies.template_engine import MarkupTemplate


# =============================================================================
# Settings Tests
# =============================================================================


class TestSettings:
    """Test suite for Settings."""

    def test_defaults(self):
        """Test the default strategy selection."""
        settings = Settings(_env_file=None)

        assert settings.form_builder_type == "html"
        assert settings.bean_inspector_type == "model"
        assert settings.log_dir is None
        assert "yes" in settings.truthy_values

    def test_log_level_is_normalized(self):
        """Test that log levels are uppercased."""
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_truthy_values_are_normalized(self):
        """Test that truthy tokens are lowercased and stripped."""
        settings = Settings(_env_file=None, truthy_values=[" JA ", "", "Oui"])

        assert settings.truthy_values == ["ja", "oui"]

    def test_environment_overrides(self, monkeypatch):
        """Test that prefixed environment variables are read."""
        monkeypatch.setenv("FORMBINDER_LOG_LEVEL", "warning")
        monkeypatch.setenv("FORMBINDER_FORM_BUILDER_TYPE", "custom")

        settings = Settings(_env_file=None)

        assert settings.log_level == "WARNING"
        assert settings.form_builder_type == "custom"

    def test_get_settings_singleton(self, monkeypatch):
        """Test that the global settings are created once."""
        monkeypatch.setattr(config, "_settings", None)

        assert get_settings() is get_settings()


# =============================================================================
# Logging Tests
# =============================================================================


class TestLoggingSetup:
    """Test suite for the logging handlers."""

    @pytest.fixture(autouse=True)
    def restore_handlers(self):
        """Reset the package logger after each test."""
        yield
        package_logger = logging.getLogger("formbinder")
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()

    def test_console_only(self):
        """Test that only a console handler is installed without a log directory."""
        package_logger = setup_logging(Settings(_env_file=None))

        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.INFO

    def test_file_handlers(self, tmp_path):
        """Test that info and error files are created in the log directory."""
        log_dir = tmp_path / "logs"

        package_logger = setup_logging(Settings(_env_file=None, log_dir=log_dir, log_level="DEBUG"))

        assert len(package_logger.handlers) == 3
        assert package_logger.level == logging.DEBUG
        assert (log_dir / "info.log").exists()
        assert (log_dir / "error.log").exists()

    def test_setup_is_repeatable(self):
        """Test that repeated setup doesn't stack handlers."""
        setup_logging(Settings(_env_file=None))
        package_logger = setup_logging(Settings(_env_file=None))

        assert len(package_logger.handlers) == 1

    def test_get_logger(self):
        """Test that named loggers are returned."""
        assert get_logger("formbinder.test").name == "formbinder.test"


# =============================================================================
# Component Factory Tests
# =============================================================================


class TestComponentFactory:
    """Test suite for ComponentFactory."""

    @pytest.fixture
    def component_factory(self):
        """Create a factory with isolated settings."""
        return ComponentFactory(Settings(_env_file=None, truthy_values=["ja"]))

    def test_form_builder(self, component_factory):
        """Test that the configured form builder is created and cached."""
        builder = component_factory.get_form_builder()

        assert isinstance(builder, HtmlFormBuilder)
        assert isinstance(builder.inspector, ModelInspector)
        assert component_factory.get_form_builder() is builder

    def test_form_builder_uses_truthy_values(self, component_factory):
        """Test that configured truthy tokens reach the builder."""
        template = component_factory.create_template("<!--v form:checkbox:invoice/-->")

        component_factory.get_form_builder().generate_field(template, "invoice", ["ja"])

        assert 'checked="checked"' in template.get_value("form:checkbox:invoice")

    def test_unknown_form_builder_raises(self, component_factory):
        """Test that unknown builder types raise ValueError."""
        with pytest.raises(ValueError, match="Unknown form builder type"):
            component_factory.get_form_builder("pdf")

    def test_unknown_bean_inspector_raises(self, component_factory):
        """Test that unknown inspector types raise ValueError."""
        with pytest.raises(ValueError, match="Unknown bean inspector type"):
            component_factory.get_bean_inspector("orm")

    def test_clear_cache(self, component_factory):
        """Test that clearing the cache creates new instances."""
        builder = component_factory.get_form_builder()

        component_factory.clear_cache()

        assert component_factory.get_form_builder() is not builder

    def test_templates_are_not_cached(self, component_factory):
        """Test that every template is a new instance."""
        first = component_factory.create_template("<!--v a/-->", name="a")
        second = component_factory.create_template("<!--v a/-->", name="a")

        assert isinstance(first, MarkupTemplate)
        assert first is not second

    def test_load_template(self, component_factory, tmp_path):
        """Test loading a template file."""
        path = tmp_path / "login.html"
        path.write_text("<!--v form:input:login/-->", encoding="utf-8")

        template = component_factory.load_template(path)

        assert template.has_value_id("form:input:login")

    def test_get_factory_singleton(self, monkeypatch):
        """Test that the global factory is created once."""
        monkeypatch.setattr(factory, "_factory", None)
        monkeypatch.setattr(config, "_settings", Settings(_env_file=None))

        assert get_factory() is get_factory()
