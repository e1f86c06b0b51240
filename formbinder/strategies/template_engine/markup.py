"""Comment-tag template store.

A small template implementation whose tags are HTML comments, so templates
stay valid markup before they are filled in:

- ``<!--v name/-->`` declares a value tag.
- ``<!--v name-->default<!--/v-->`` declares a value tag with default content.
- ``<!--b name-->content<!--/b-->`` declares a block; blocks aren't part of
  the rendered output but can be expanded into value tags.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from markupsafe import escape

from formbinder.interfaces.template import BaseTemplate, TemplateError

logger = logging.getLogger(__name__)

_BLOCK_PATTERN = re.compile(
    r"<!--b\s+(?P<name>[^\s>]+?)\s*-->(?P<content>.*?)<!--/b-->",
    re.DOTALL,
)
_VALUE_PATTERN = re.compile(
    r"<!--v\s+(?P<name>[^\s>]+?)\s*(?:/-->|-->(?P<default>.*?)<!--/v-->)",
    re.DOTALL,
)
_STRAY_TAGS = ("<!--v ", "<!--/v-->", "<!--b ", "<!--/b-->")


@dataclass(frozen=True)
class _ValueTag:
    name: str


_Part = str | _ValueTag


class MarkupTemplate(BaseTemplate):
    """Template store backed by comment tags.

    Attributes:
        name: Optional name used in log messages and errors.
    """

    def __init__(self, content: str, name: str = "") -> None:
        """Parse the template content.

        Args:
            content: The template source.
            name: Optional template name.

        Raises:
            TemplateError: If a tag isn't terminated properly.
        """
        self.name = name
        self._blocks: dict[str, list[_Part]] = {}
        self._defaults: dict[str, str] = {}
        self._value_ids: set[str] = set()
        self._values: dict[str, str] = {}
        self._generated: set[str] = set()
        self._label_bundles: list[Mapping[str, str]] = []

        body = []
        pos = 0
        for match in _BLOCK_PATTERN.finditer(content):
            body.append(content[pos : match.start()])
            block_name = match.group("name")
            if block_name in self._blocks:
                raise TemplateError(f"Duplicate block '{block_name}' in template {name!r}")
            self._blocks[block_name] = self._parse(match.group("content"))
            pos = match.end()
        body.append(content[pos:])

        self._parts = self._parse("".join(body))

        logger.debug(
            f"Parsed template {name!r}: {len(self._value_ids)} value tags, "
            f"{len(self._blocks)} blocks"
        )

    @classmethod
    def from_file(cls, file_path: str | Path, encoding: str = "utf-8") -> "MarkupTemplate":
        """Load and parse a template file.

        Args:
            file_path: Path to the template file.
            encoding: The character encoding of the file.

        Returns:
            The parsed template, named after the file.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            TemplateError: If the template can't be parsed.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Template file not found: {file_path}")

        logger.info(f"Loading template: {file_path}")
        return cls(path.read_text(encoding=encoding), name=path.stem)

    def _parse(self, text: str) -> list[_Part]:
        parts: list[_Part] = []
        pos = 0
        for match in _VALUE_PATTERN.finditer(text):
            if match.start() > pos:
                parts.append(text[pos : match.start()])
            value_id = match.group("name")
            parts.append(_ValueTag(value_id))
            self._value_ids.add(value_id)
            default = match.group("default")
            if default is not None:
                self._defaults.setdefault(value_id, default)
            pos = match.end()
        if pos < len(text):
            parts.append(text[pos:])

        for part in parts:
            if isinstance(part, str):
                for stray in _STRAY_TAGS:
                    if stray in part:
                        raise TemplateError(
                            f"Malformed tag near '{stray}' in template {self.name!r}"
                        )
        return parts

    def _render(self, parts: list[_Part]) -> str:
        output = []
        for part in parts:
            if isinstance(part, _ValueTag):
                if part.name in self._values:
                    output.append(self._values[part.name])
                else:
                    output.append(self._defaults.get(part.name, ""))
            else:
                output.append(part)
        return "".join(output)

    # =========================================================================
    # Value tags
    # =========================================================================

    def has_value_id(self, value_id: str) -> bool:
        return value_id in self._value_ids

    def is_value_set(self, value_id: str) -> bool:
        return value_id in self._values

    def get_value(self, value_id: str) -> str | None:
        return self._values.get(value_id)

    def set_value(self, value_id: str, value: str) -> None:
        self._values[value_id] = "" if value is None else str(value)

    def append_value(self, value_id: str, value: str) -> None:
        self._values[value_id] = self._values.get(value_id, "") + ("" if value is None else str(value))

    def remove_value(self, value_id: str) -> None:
        self._values.pop(value_id, None)
        self._generated.discard(value_id)

    def has_default_value(self, value_id: str) -> bool:
        return value_id in self._defaults

    def get_default_value(self, value_id: str) -> str | None:
        return self._defaults.get(value_id)

    # =========================================================================
    # Blocks
    # =========================================================================

    def has_block(self, block_id: str) -> bool:
        return block_id in self._blocks

    def get_block(self, block_id: str) -> str:
        if block_id not in self._blocks:
            raise TemplateError(f"Block '{block_id}' not found in template {self.name!r}")
        return self._render(self._blocks[block_id])

    # =========================================================================
    # Generated values
    # =========================================================================

    def add_generated_values(self, value_ids: Iterable[str]) -> None:
        self._generated.update(value_ids)

    def is_value_generated(self, value_id: str) -> bool:
        return value_id in self._generated

    # =========================================================================
    # Label bundles
    # =========================================================================

    def add_label_bundle(self, bundle: Mapping[str, str]) -> None:
        self._label_bundles.append(bundle)

    def remove_label_bundle(self, bundle: Mapping[str, str]) -> None:
        self._label_bundles = [b for b in self._label_bundles if b is not bundle]

    def clear_label_bundles(self) -> None:
        self._label_bundles = []

    @property
    def label_bundles(self) -> list[Mapping[str, str]]:
        return list(self._label_bundles)

    # =========================================================================
    # Output
    # =========================================================================

    def encode(self, value: str) -> str:
        return str(escape(value))

    def get_content(self) -> str:
        return self._render(self._parts)

    def __str__(self) -> str:
        return self.get_content()
