"""
TypeScript emission backend.

Generates one ``dto.ts`` file with an interface (or type alias) per DTO.
"""

from __future__ import annotations

from typing import Any

from ..analyzer.type_classifier import TypeClassifier
from ..analyzer.type_resolver import TypeResolver
from ..config import BuilderConfig
from ..schema.nodes import FieldDefinition, SchemaSet
from .base import DtoBackend


class TypeScriptBackend(DtoBackend):
    """TypeScript interface generation backend."""

    TEMPLATE_LANG = "typescript"
    FILE_NAME = "dto.ts"

    TYPE_MAP = {
        "int": "number",
        "float": "number",
        "string": "string",
        "bool": "boolean",
        "array": "any[]",
        "mixed": "unknown",
        "object": "Record<string, unknown>",
        "callable": "(...args: any[]) => any",
        "resource": "unknown",
        "iterable": "Iterable<unknown>",
        "null": "null",
    }

    DATE_TYPES = ("\\datetime\\datetime", "\\datetime\\date", "\\datetime\\time")

    ENUM_TYPES = {"int": "number", "float": "number", "string": "string", "unit": "string"}

    # Serialize modes whose values are emitted as plain objects
    ARRAY_SERIALIZE = ("array", "FromArrayToArray")

    def __init__(
        self,
        config: BuilderConfig | None = None,
        readonly: bool = False,
        strict_nulls: bool = False,
        export_style: str = "interface",
    ):
        if export_style not in ("interface", "type"):
            raise ValueError(f"Unknown export style `{export_style}`, expected `interface` or `type`")
        super().__init__(config)
        self.readonly = readonly
        self.strict_nulls = strict_nulls
        self.export_style = export_style
        self.resolver = TypeResolver(TypeClassifier())

        self.prefix_template = self.jinja_env.get_template("prefix.ts.jinja2")
        self.interface_template = self.jinja_env.get_template("interface.ts.jinja2")

    def generate(self, schema_set: SchemaSet, generation_comment: str = "") -> str:
        """Generate TypeScript code for all DTOs, dependencies first."""
        content = self.prefix_template.render(generation_comment=generation_comment)

        for dto in self.sorted_dtos(schema_set):
            readonly = self.readonly or dto.immutable
            properties = [self._prepare_field_context(field, schema_set, readonly) for field in dto.fields.values()]
            content += "\n" + self.interface_template.render(
                NAME=self.type_name(dto.name),
                EXPORT_STYLE=self.export_style,
                DEPRECATED=dto.deprecated,
                properties=properties,
            )

        return content

    def _prepare_field_context(self, field: FieldDefinition, schema_set: SchemaSet, readonly: bool) -> dict[str, Any]:
        ts_type = self.translate_type(field, schema_set)
        optional = field.nullable

        if optional and self.strict_nulls:
            optional = False
            ts_type += " | null"

        return {
            "name": field.name,
            "type": ts_type,
            "marker": "?" if optional else "",
            "modifier": "readonly " if readonly else "",
            "deprecated": field.deprecated,
        }

    def translate_type(self, field: FieldDefinition, schema_set: SchemaSet) -> str:
        """Translate a completed field to a TypeScript type."""
        if field.collection or field.is_array:
            if not field.singular_type:
                return "any[]"
            element = self._translate_single(field.singular_type, schema_set, field.enum)
            if field.singular_nullable:
                element = f"{element} | null"
            if field.associative:
                return f"Record<string, {element}>"
            return f"({element})[]" if field.singular_nullable else f"{element}[]"

        if field.dto and field.dto in schema_set:
            return self.type_name(field.dto)

        if field.is_class:
            if field.serialize in self.ARRAY_SERIALIZE:
                return self.TYPE_MAP["object"]
            return self._translate_single(field.type, schema_set, field.enum)

        return self._translate_union(field.type, schema_set)

    def _translate_union(self, type_string: str, schema_set: SchemaSet) -> str:
        members: list[str] = []
        for member in type_string.split("|"):
            if member.endswith("[]"):
                mapped = self._translate_single(member[:-2], schema_set) + "[]"
            else:
                mapped = self._translate_single(member, schema_set)
            if mapped not in members:
                members.append(mapped)
        return " | ".join(members)

    def _translate_single(self, type_string: str, schema_set: SchemaSet, enum: str | None = None) -> str:
        if type_string in self.TYPE_MAP:
            return self.TYPE_MAP[type_string]

        dto = self.referenced_dto(type_string, schema_set)
        if dto is not None:
            return self.type_name(dto.name)

        if type_string in self.DATE_TYPES:
            return "string"

        if enum is None:
            enum = self._enum_kind(type_string)
        if enum:
            return self.ENUM_TYPES[enum]

        return "unknown"

    def _enum_kind(self, type_string: str) -> str | None:
        return self.resolver.enum_backing_kind(type_string)
