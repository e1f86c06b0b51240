"""Unit tests for the comment-tag template store."""

import pytest

from formbinder.interfaces.template import TemplateError
from formbinder.strategies.template_engine import MarkupTemplate


# =============================================================================
# Parsing Tests
# =============================================================================


class TestMarkupTemplateParsing:
    """Test suite for parsing value tags and blocks."""

    def test_declares_value_tags(self):
        """Test that short and long value tags are both declared."""
        template = MarkupTemplate("<p><!--v one/--> <!--v two-->default<!--/v--></p>")

        assert template.has_value_id("one")
        assert template.has_value_id("two")
        assert not template.has_value_id("three")

    def test_renders_defaults_when_unset(self):
        """Test that unset tags render their default content."""
        template = MarkupTemplate("<p><!--v one/-->|<!--v two-->default<!--/v--></p>")

        assert template.get_content() == "<p>|default</p>"
        assert template.has_default_value("two")
        assert template.get_default_value("two") == "default"
        assert not template.has_default_value("one")
        assert template.get_default_value("one") is None

    def test_blocks_are_not_rendered(self):
        """Test that blocks are excluded from the output."""
        template = MarkupTemplate("before<!--b extra-->hidden<!--/b-->after")

        assert template.get_content() == "beforeafter"
        assert template.has_block("extra")
        assert template.get_block("extra") == "hidden"

    def test_value_tags_inside_blocks_are_declared(self):
        """Test that tags used only inside a block are declared too."""
        template = MarkupTemplate("<!--b row--><td><!--v cell/--></td><!--/b-->")

        assert template.has_value_id("cell")
        template.set_value("cell", "x")
        assert template.get_block("row") == "<td>x</td>"

    def test_unterminated_value_tag_raises(self):
        """Test that a malformed value tag raises TemplateError."""
        with pytest.raises(TemplateError):
            MarkupTemplate("<p><!--v broken</p>")

    def test_unterminated_block_raises(self):
        """Test that a block without an end tag raises TemplateError."""
        with pytest.raises(TemplateError):
            MarkupTemplate("<!--b open-->content")

    def test_duplicate_block_raises(self):
        """Test that declaring a block twice raises TemplateError."""
        with pytest.raises(TemplateError, match="Duplicate block"):
            MarkupTemplate("<!--b a-->1<!--/b--><!--b a-->2<!--/b-->")

    def test_from_file(self, tmp_path):
        """Test loading a template from a file."""
        path = tmp_path / "account.html"
        path.write_text("<form><!--v form:input:login/--></form>", encoding="utf-8")

        template = MarkupTemplate.from_file(path)

        assert template.name == "account"
        assert template.has_value_id("form:input:login")

    def test_from_missing_file_raises(self, tmp_path):
        """Test that loading a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            MarkupTemplate.from_file(tmp_path / "missing.html")


# =============================================================================
# Value Store Tests
# =============================================================================


class TestMarkupTemplateValues:
    """Test suite for assigning and clearing values."""

    @pytest.fixture
    def template(self):
        """Create a template with one plain and one defaulted tag."""
        return MarkupTemplate("[<!--v plain/-->][<!--v rich-->fallback<!--/v-->]<!--b bold--><b><!--v plain/--></b><!--/b-->")

    def test_set_and_get(self, template):
        """Test that set values are rendered and reported."""
        template.set_value("plain", "text")

        assert template.is_value_set("plain")
        assert template.get_value("plain") == "text"
        assert template.get_content() == "[text][fallback]"

    def test_set_value_overrides_default(self, template):
        """Test that an assigned value replaces the default content."""
        template.set_value("rich", "")

        assert template.get_content() == "[][]"

    def test_append_value(self, template):
        """Test that appended content accumulates."""
        template.append_value("plain", "a")
        template.append_value("plain", "b")

        assert template.get_value("plain") == "ab"

    def test_remove_value_restores_default(self, template):
        """Test that removing a value renders the default again."""
        template.set_value("rich", "changed")
        template.add_generated_values(["rich"])

        template.remove_value("rich")

        assert not template.is_value_set("rich")
        assert not template.is_value_generated("rich")
        assert template.get_content() == "[][fallback]"

    def test_blank_value(self, template):
        """Test that blanking assigns empty content."""
        template.blank_value("rich")

        assert template.is_value_set("rich")
        assert template.get_value("rich") == ""

    def test_set_and_append_block(self, template):
        """Test that blocks can be rendered into value tags."""
        template.set_value("plain", "x")
        template.set_block("rich", "bold")
        template.append_block("rich", "bold")

        assert template.get_value("rich") == "<b>x</b><b>x</b>"

    def test_unknown_block_raises(self, template):
        """Test that rendering an unknown block raises TemplateError."""
        with pytest.raises(TemplateError):
            template.get_block("missing")

    def test_generated_values(self, template):
        """Test tracking of generated tags."""
        template.add_generated_values(["plain"])

        assert template.is_value_generated("plain")
        assert not template.is_value_generated("rich")

    def test_encode_escapes_markup(self, template):
        """Test that encoding escapes HTML special characters."""
        assert template.encode('<a href="x">&</a>') == "&lt;a href=&#34;x&#34;&gt;&amp;&lt;/a&gt;"

    def test_label_bundles(self, template):
        """Test registering and removing label bundles."""
        first = {"color:red": "Red"}
        second = {"color:red": "Rood"}

        template.add_label_bundle(first)
        template.add_label_bundle(second)
        assert template.label_bundles == [first, second]

        template.remove_label_bundle(first)
        assert template.label_bundles == [second]

        template.clear_label_bundles()
        assert template.label_bundles == []
