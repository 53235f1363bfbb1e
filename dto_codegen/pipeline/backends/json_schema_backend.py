"""
JSON Schema emission backend.

Generates a single draft 2020-12 document with one ``$defs`` entry per DTO.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from ..analyzer.type_classifier import TypeClassifier, resolve_class
from ..analyzer.type_resolver import TypeResolver
from ..config import BuilderConfig
from ..schema.nodes import DtoDefinition, FieldDefinition, SchemaSet
from .base import DtoBackend

SCHEMA_VERSION = "https://json-schema.org/draft/2020-12/schema"


class JsonSchemaBackend(DtoBackend):
    """JSON Schema generation backend."""

    FILE_NAME = "dto-schemas.json"

    TYPE_MAP = {
        "int": "integer",
        "float": "number",
        "string": "string",
        "bool": "boolean",
        "array": "array",
        "object": "object",
        "iterable": "array",
        "null": "null",
    }

    DATE_FORMATS = {
        "\\datetime\\datetime": "date-time",
        "\\datetime\\date": "date",
        "\\datetime\\time": "time",
    }

    ENUM_TYPES = {"int": "integer", "float": "number", "string": "string", "unit": "string"}

    def __init__(self, config: BuilderConfig | None = None):
        super().__init__(config)
        self.resolver = TypeResolver(TypeClassifier())

    def generate(self, schema_set: SchemaSet, generation_comment: str = "") -> str:
        return json.dumps(self.build_document(schema_set, generation_comment), indent=2) + "\n"

    def build_document(self, schema_set: SchemaSet, generation_comment: str = "") -> dict[str, Any]:
        """Build the JSON Schema document as a dict."""
        description = "Auto-generated JSON Schema from dto_codegen"
        if generation_comment:
            description += f" ({generation_comment})"

        return {
            "$schema": SCHEMA_VERSION,
            "$id": self.FILE_NAME,
            "title": "DTO Schemas",
            "description": description,
            "$defs": {self.type_name(dto.name): self.build_object(dto, schema_set) for dto in schema_set.values()},
        }

    def build_object(self, dto: DtoDefinition, schema_set: SchemaSet) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "object", "properties": {}}
        required = []

        for name, field in dto.fields.items():
            schema["properties"][name] = self.map_field(field, schema_set)
            if field.required:
                required.append(name)

        if required:
            schema["required"] = required
        if dto.deprecated:
            schema["deprecated"] = True
        schema["additionalProperties"] = False
        return schema

    def map_field(self, field: FieldDefinition, schema_set: SchemaSet) -> dict[str, Any]:
        """Map a completed field to its property schema."""
        if field.collection or field.is_array:
            items = self._map_single(field.singular_type, schema_set) if field.singular_type else {}
            if field.singular_nullable:
                items = self.make_nullable(items)
            if field.associative:
                schema = {"type": "object", "additionalProperties": items}
            else:
                schema = {"type": "array", "items": items}
        elif field.dto and field.dto in schema_set:
            schema = self._ref(field.dto)
        elif field.is_class:
            schema = self._map_single(field.type, schema_set)
        else:
            schema = self._map_union(field.type, schema_set)

        if field.deprecated:
            schema = {**schema, "deprecated": True}
        if field.nullable:
            schema = self.make_nullable(schema)
        return schema

    def make_nullable(self, schema: dict[str, Any]) -> dict[str, Any]:
        if not schema:
            return schema
        if "oneOf" in schema:
            return {"oneOf": schema["oneOf"] + [{"type": "null"}]}
        return {"oneOf": [schema, {"type": "null"}]}

    def _map_union(self, type_string: str, schema_set: SchemaSet) -> dict[str, Any]:
        schemas = []
        for member in type_string.split("|"):
            if member.endswith("[]"):
                schema = {"type": "array", "items": self._map_single(member[:-2], schema_set)}
            else:
                schema = self._map_single(member, schema_set)
            if schema not in schemas:
                schemas.append(schema)

        if len(schemas) == 1:
            return schemas[0]
        return {"oneOf": schemas}

    def _map_single(self, type_string: str, schema_set: SchemaSet) -> dict[str, Any]:
        if type_string in self.TYPE_MAP:
            return {"type": self.TYPE_MAP[type_string]}

        dto = self.referenced_dto(type_string, schema_set)
        if dto is not None:
            return self._ref(dto.name)

        if type_string in self.DATE_FORMATS:
            return {"type": "string", "format": self.DATE_FORMATS[type_string]}

        cls = resolve_class(type_string)
        if cls is not None:
            return self._map_class(type_string, cls)

        # mixed, resource and unknown types accept anything
        return {}

    def _map_class(self, type_string: str, cls: type) -> dict[str, Any]:
        if not issubclass(cls, Enum):
            return {"type": "object"}

        # Unit enums are serialized by member name
        kind = self.resolver.enum_backing_kind(type_string)
        if kind == "unit" or kind is None:
            return {"type": "string", "enum": [member.name for member in cls]}
        return {"type": self.ENUM_TYPES[kind], "enum": [member.value for member in cls]}

    def _ref(self, dto_name: str) -> dict[str, Any]:
        return {"$ref": f"#/$defs/{self.type_name(dto_name)}"}
