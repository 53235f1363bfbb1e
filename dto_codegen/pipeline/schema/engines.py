"""
Config file engines.

Each engine turns one config file into the raw schema map consumed by the
builder::

    {"Order": {"name": "Order", "immutable": True,
               "fields": {"id": {"name": "id", "type": "int"}}}}

A field given as a bare type string (``id: int``) is shorthand for
``{"type": "int"}``. A leading ``?`` on a single type (``?Category``) marks
the field as not required; on an array type (``?Item[]``) it keeps its
meaning of nullable elements.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import yaml

from ...errors import EngineError
from ...logging import get_logger

logger = get_logger("engines")


def normalize_schema(data: Any, source: str | None = None) -> dict[str, dict[str, Any]]:
    """
    Normalize a parsed config document into the raw schema map.

    Sets ``name`` on every DTO and field and expands shorthand fields.

    Args:
        data: The parsed document
        source: File name used in error messages

    Returns:
        DTO name -> raw DTO map
    """
    where = f" in {source}" if source else ""
    if not isinstance(data, dict):
        raise EngineError(f"Invalid config{where}: expected a mapping of DTO names to definitions")

    result: dict[str, dict[str, Any]] = {}
    for name, dto in data.items():
        dto = dict(dto or {})
        if not isinstance(dto.get("fields") or {}, dict):
            raise EngineError(f"Invalid config{where}: `fields` of `{name}` must be a mapping")

        fields = {}
        for key, field in (dto.get("fields") or {}).items():
            field = dict(field) if isinstance(field, dict) else {"type": field}
            field["name"] = key

            type_string = field.get("type")
            if isinstance(type_string, str) and type_string.startswith("?") and not type_string.endswith("[]"):
                field["type"] = type_string[1:]
                field["required"] = False

            fields[key] = field

        dto["name"] = name
        dto["fields"] = fields
        result[name] = dto

    return result


class SchemaEngine(ABC):
    """Base class for config file engines."""

    extension: str = ""

    @abstractmethod
    def load(self, content: str) -> Any:
        """Parse raw file content into Python data."""
        pass

    def parse(self, content: str, source: str | None = None) -> dict[str, dict[str, Any]]:
        try:
            data = self.load(content)
        except EngineError:
            raise
        except Exception as e:
            where = f" {source}" if source else ""
            raise EngineError(f"Invalid {self.extension.upper()} file{where}: {e}") from e
        return normalize_schema(data, source)

    def parse_file(self, path: str | Path) -> dict[str, dict[str, Any]]:
        logger.debug("Parsing %s", path)
        return self.parse(self._read(path), str(path))

    def validate(self, files: list[str]) -> None:
        """Check that every file can be read and parsed."""
        for file in files:
            self.parse(self._read(file), str(file))

    def _read(self, path: str | Path) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise EngineError(f"Cannot read file: {path}") from e


class YamlEngine(SchemaEngine):
    extension = "yml"

    def load(self, content: str) -> Any:
        data = yaml.safe_load(content)
        if not data:
            raise EngineError("Invalid YAML file: empty document")
        return data


class JsonEngine(SchemaEngine):
    extension = "json"

    def load(self, content: str) -> Any:
        return json.loads(content)


class XmlEngine(SchemaEngine):
    """
    Reads ``<dtos>`` documents::

        <dtos>
          <dto name="Order" immutable="true">
            <field name="id" type="int" required="true"/>
          </dto>
        </dtos>

    Attribute values ``"true"``/``"false"`` and numeric strings are
    converted to their Python values.
    """

    extension = "xml"

    def load(self, content: str) -> Any:
        root = ET.fromstring(content)
        if root.tag != "dtos":
            raise EngineError(f"Invalid XML root element `{root.tag}`, expected `dtos`")

        result = {}
        for dto_element in root.findall("dto"):
            dto = {key: self._convert(value) for key, value in dto_element.attrib.items()}
            name = dto_element.get("name")
            if not name:
                raise EngineError("Invalid XML: every <dto> needs a name attribute")

            fields = {}
            for field_element in dto_element.findall("field"):
                field = {key: self._convert(value) for key, value in field_element.attrib.items()}
                field["name"] = field_element.get("name", "")
                field["type"] = field_element.get("type", "")
                fields[field["name"]] = field

            dto["fields"] = fields
            result[name] = dto

        return result

    def _convert(self, value: str) -> Any:
        if value == "true":
            return True
        if value == "false":
            return False
        try:
            return int(value)
        except ValueError:
            pass
        try:
            return float(value)
        except ValueError:
            return value


ENGINES: dict[str, type[SchemaEngine]] = {
    "yml": YamlEngine,
    "yaml": YamlEngine,
    "json": JsonEngine,
    "xml": XmlEngine,
}


def get_engine(format: str) -> SchemaEngine:
    """Return an engine instance for a config format name."""
    try:
        return ENGINES[format.lower()]()
    except KeyError:
        raise EngineError(f"Unknown config format `{format}`, expected one of: {', '.join(ENGINES)}") from None
