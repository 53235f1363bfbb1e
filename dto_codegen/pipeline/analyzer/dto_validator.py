"""
Validation of raw DTO definitions, before any completion takes place.
"""

from __future__ import annotations

from typing import Any

from ...errors import (
    CollectionConfigError,
    FieldTypeError,
    MergeConflictError,
    MethodCollisionError,
    NameFormatError,
)
from ...inflector import camelize, underscore, variable
from .type_classifier import TypeClassifier


class DtoValidator:
    """Validates DTO configuration maps as produced by the engines."""

    def __init__(self, classifier: TypeClassifier):
        self.classifier = classifier

    def validate(self, dto: dict[str, Any]) -> None:
        """
        Validate a raw DTO definition.

        Checks run in order and the first failure is raised: DTO name,
        then each field (name, type, attribute keys, collection notation,
        singular name), then accessor name collisions across fields.

        Args:
            dto: Raw DTO map with ``name`` and ``fields``

        Raises:
            NameFormatError: Bad DTO name, field name or attribute key
            FieldTypeError: Missing or unknown field type
            CollectionConfigError: Bad collection notation or singular name
            MethodCollisionError: Two fields map to the same accessor name
        """
        self.validate_dto_name(dto)
        self.validate_fields(dto)
        self.validate_method_name_collisions(dto)

    def validate_dto_name(self, dto: dict[str, Any]) -> None:
        name = dto.get("name")
        if not name:
            raise NameFormatError(
                "DTO name missing, but required.",
                hint='Each DTO definition must have a "name" attribute.',
            )

        if not self.classifier.is_valid_dto_name(name):
            raise NameFormatError(
                f"Invalid DTO name `{name}`.",
                dto_name=name,
                hint='DTO names must be PascalCase starting with uppercase letter (e.g., "UserProfile", "OrderItem").',
            )

    def validate_fields(self, dto: dict[str, Any]) -> None:
        dto_name = dto["name"]
        for key, field in (dto.get("fields") or {}).items():
            self.validate_field_name(field, key, dto_name)
            self.validate_field_type(field, key, dto_name)
            self.validate_field_attributes(field, key, dto_name)
            self.validate_field_collection(field, key, dto_name)
            self.validate_field_singular(field, key, dto_name)

    def validate_field_name(self, field: dict[str, Any], field_key: str, dto_name: str) -> None:
        name = field.get("name")
        if not name:
            raise NameFormatError(
                f"Field attribute `name` missing for field `{field_key}` in `{dto_name}` DTO.",
                dto_name=dto_name,
                field_name=field_key,
                hint='Each field must have a "name" attribute.',
            )

        if not self.classifier.is_valid_field_name(name):
            raise NameFormatError(
                f"Invalid field name `{name}` in `{dto_name}` DTO.",
                dto_name=dto_name,
                field_name=field_key,
                hint='Field names must be alphanumeric starting with a letter (e.g., "userName", "itemCount").',
            )

    def validate_field_type(self, field: dict[str, Any], field_key: str, dto_name: str) -> None:
        type_string = field.get("type")
        if not type_string:
            raise FieldTypeError(
                f"Field attribute `type` missing for field `{field_key}` in `{dto_name}` DTO.",
                dto_name=dto_name,
                field_name=field_key,
                hint='Each field must have a "type" attribute (e.g., "string", "int", "ItemDto[]").',
            )

        if not self.classifier.is_valid_type(type_string):
            raise FieldTypeError(
                f"Invalid type `{type_string}` for field `{field_key}` in `{dto_name}` DTO.",
                dto_name=dto_name,
                field_name=field_key,
                hint=(
                    "Valid types include: scalar types (int, string, bool, float), "
                    "DTO references (OtherDto), arrays (string[], OtherDto[]), "
                    "or fully qualified class names (\\package\\module\\MyClass)."
                ),
            )

    def validate_field_attributes(self, field: dict[str, Any], field_key: str, dto_name: str) -> None:
        for key in field:
            expected = variable(underscore(key))
            if key != expected:
                raise NameFormatError(
                    f"Invalid field attribute `{key}` for field `{field_key}` in `{dto_name}` DTO.",
                    dto_name=dto_name,
                    field_name=field_key,
                    hint=f"Expected `{expected}` (camelCase format).",
                )

    def validate_field_collection(self, field: dict[str, Any], field_key: str, dto_name: str) -> None:
        if not field.get("collection"):
            return

        type_string = field["type"]
        if not (self.classifier.is_array_type(type_string) and self.classifier.is_collection_type(type_string)):
            raise CollectionConfigError(
                f"Invalid collection type `{type_string}` for field `{field_key}` in `{dto_name}` DTO.",
                dto_name=dto_name,
                field_name=field_key,
                hint='Collection types must use array notation (e.g., "string[]", "ItemDto[]").',
            )

    def validate_field_singular(self, field: dict[str, Any], field_key: str, dto_name: str) -> None:
        singular = field.get("singular")
        if not singular:
            return

        expected = variable(underscore(singular))
        if singular != expected:
            raise CollectionConfigError(
                f"Invalid singular name `{singular}` for field `{field_key}` in `{dto_name}` DTO.",
                dto_name=dto_name,
                field_name=field_key,
                hint=f"Expected `{expected}` (camelCase format).",
            )

        if field.get("collection") is False:
            raise CollectionConfigError(
                f"Invalid `singular` attribute for non-collection field `{field_key}` in `{dto_name}` DTO.",
                dto_name=dto_name,
                field_name=field_key,
                hint='The "singular" attribute is only valid for collection fields.',
            )

    def validate_method_name_collisions(self, dto: dict[str, Any]) -> None:
        dto_name = dto["name"]
        method_names: dict[str, str] = {}

        for field in (dto.get("fields") or {}).values():
            field_name = field["name"]
            method_name = camelize(field_name)

            if method_name in method_names:
                raise MethodCollisionError(
                    f"Field name collision in `{dto_name}` DTO: fields `{method_names[method_name]}` "
                    f"and `{field_name}` would generate identical method names.",
                    dto_name=dto_name,
                    field_name=field_name,
                    hint=(
                        f"Both fields would generate methods like `get{method_name}()`, "
                        f"`set{method_name}()`, etc. Use only one of these field names."
                    ),
                )
            method_names[method_name] = field_name

    def validate_merge(
        self,
        existing: dict[str, Any] | None,
        new: dict[str, Any] | None,
        existing_source: str | None = None,
        new_source: str | None = None,
    ) -> None:
        """
        Check that two declarations of the same DTO can be merged.

        A field declared in both must have the same ``type`` wherever both
        declarations set one.

        Args:
            existing: The DTO map merged so far
            new: The DTO map about to be merged in
            existing_source: File the existing declaration came from
            new_source: File the new declaration came from

        Raises:
            MergeConflictError: A field's type differs between the two
        """
        if not existing or not new:
            return

        dto_name = existing.get("name") or new.get("name") or "unknown"
        new_fields = new.get("fields") or {}

        for field_name, info in (existing.get("fields") or {}).items():
            other = new_fields.get(field_name)
            if other is None or not info.get("type") or not other.get("type"):
                continue

            if info["type"] != other["type"]:
                message = (
                    f"Type mismatch for field `{field_name}` in `{dto_name}` DTO during merge.\n"
                    f"Existing type: `{info['type']}`, new type: `{other['type']}`."
                )
                if existing_source or new_source:
                    message += f"\nDeclared in `{existing_source or 'unknown'}` and `{new_source or 'unknown'}`."
                raise MergeConflictError(
                    message,
                    dto_name=dto_name,
                    field_name=field_name,
                    hint="Field types must be consistent across all configuration files.",
                )
