"""
Field completion for one DTO.

Each field passes through these phases in order, never going back:

1. defaults applied
2. type resolved (scalar, DTO, collection, array or class)
3. type hints completed
4. collection hints completed
5. array hints completed
6. nullable hints completed
7. singular hints completed
"""

from __future__ import annotations

import re
from typing import Any

from ...errors import CollectionConfigError, FieldTypeError
from ...inflector import field_name_to_accessor_name, singularize
from ...logging import get_logger
from ..config import BuilderConfig
from ..schema.nodes import DtoDefinition, FieldDefinition
from .array_shape_builder import ArrayShapeBuilder
from .type_classifier import TypeClassifier
from .type_resolver import TypeResolver

logger = get_logger("field_completor")

_DTO_ARRAY = re.compile(r"^([A-Z][a-zA-Z0-9/]+)\[\]$")

# DTO-level keys copied from the raw config onto DtoDefinition attributes
_DTO_ATTRIBUTES = ("immutable", "extends", "traits", "deprecated")


class FieldCompletor:
    """Completes and enriches field definitions with computed values."""

    def __init__(
        self,
        classifier: TypeClassifier,
        resolver: TypeResolver,
        array_shape_builder: ArrayShapeBuilder,
        config: BuilderConfig,
    ):
        self.classifier = classifier
        self.resolver = resolver
        self.array_shape_builder = array_shape_builder
        self.default_collection_type = config.default_collection_type
        self.associative_key_type = config.associative_key_type
        self.suffix = config.suffix
        self.scalar_and_return_types = config.scalar_and_return_types

    def complete(self, raw_dto: dict[str, Any], namespace: str) -> DtoDefinition:
        """
        Apply field defaults and resolve every field's type.

        Args:
            raw_dto: The validated raw DTO map
            namespace: Root namespace for DTO class references

        Returns:
            A DtoDefinition with resolved fields
        """
        dto_name = raw_dto["name"]
        fields = self.add_field_defaults(raw_dto.get("fields") or {})
        fields = self.resolve_field_types(fields, dto_name, namespace)

        dto = DtoDefinition(name=dto_name, fields=fields)
        for key, value in raw_dto.items():
            if key in ("name", "fields"):
                continue
            if key in _DTO_ATTRIBUTES:
                setattr(dto, key, value)
            else:
                dto.extra[key] = value
        return dto

    def complete_meta(self, dto: DtoDefinition, namespace: str) -> DtoDefinition:
        """Complete type hints, doc types and accessor names of every field."""
        for name, field in dto.fields.items():
            self.complete_field_type_hints(field, namespace)
            self.complete_collection_type_hints(field)
            self.complete_array_type_hints(field)
            self.complete_nullable_type_hints(field)
            self.complete_singular_type_hints(field)
            logger.debug("Completed field %s.%s: %s", dto.name, name, field.type_hint)
        return dto

    def add_field_defaults(self, raw_fields: dict[str, dict[str, Any]]) -> dict[str, FieldDefinition]:
        """Build fields from raw maps; a field is nullable unless it is required."""
        fields = {}
        for key, data in raw_fields.items():
            data = dict(data)
            data.setdefault("name", key)
            data.setdefault("collection", bool(data.get("singular")))
            field = FieldDefinition.from_dict(data)
            field.required = bool(field.required)
            field.nullable = not field.required
            fields[key] = field
        return fields

    def resolve_field_types(self, fields: dict[str, FieldDefinition], dto_name: str, namespace: str) -> dict[str, FieldDefinition]:
        """Classify each field and fill in the derived flags."""
        for key, field in fields.items():
            type_string = field.type

            if self.classifier.is_scalar(type_string, self.classifier.doc_only_types):
                continue

            if self.classifier.is_valid_dto_name(type_string):
                field.dto = type_string
                continue

            if self.is_collection(field):
                self.resolve_collection_field(field, dto_name, namespace, fields)
                continue

            if self.classifier.is_array_type(type_string):
                self.resolve_array_field(field, namespace, fields)
                continue

            if self.classifier.is_class_reference(type_string):
                field.is_class = True
                if not field.serialize:
                    field.serialize = self.resolver.detect_auto_serialize(type_string)
                field.enum = self.resolver.enum_backing_kind(type_string)
                continue

            raise FieldTypeError(
                f"Invalid type `{type_string}` for field `{key}` in `{dto_name}` DTO.",
                dto_name=dto_name,
                field_name=key,
                hint=(
                    "Valid types include: scalar types (int, string, bool, float), "
                    "DTO references (OtherDto), arrays (string[], OtherDto[]), "
                    "or fully qualified class names (\\package\\module\\MyClass)."
                ),
            )

        return fields

    def is_collection(self, field: FieldDefinition) -> bool:
        return bool(field.collection or field.collection_type or field.associative)

    def resolve_collection_field(
        self,
        field: FieldDefinition,
        dto_name: str,
        namespace: str,
        all_fields: dict[str, FieldDefinition],
    ) -> FieldDefinition:
        """Resolve collection class, element type and singular name of a field."""
        field.collection = True
        field.collection_type = self.resolver.collection_type(field, self.default_collection_type)
        field.nullable = False

        self.complete_collection_singular(field, dto_name, namespace, all_fields)
        field.singular_nullable = field.type.startswith("?")

        if field.singular and field.singular in all_fields:
            raise CollectionConfigError(
                f"Invalid singular name `{field.singular}` for collection field `{field.name}` in `{dto_name}` DTO.",
                dto_name=dto_name,
                field_name=field.name,
                hint=f"The singular name conflicts with existing field `{field.singular}`. Use a different singular name.",
            )

        match = _DTO_ARRAY.match(field.type)
        if match:
            field.type = self.resolver.dto_type_to_class(match.group(1), namespace, self.suffix) + "[]"

        if field.singular_nullable:
            field.type = f"({field.singular_type}|null)[]"

        return field

    def resolve_array_field(
        self,
        field: FieldDefinition,
        namespace: str,
        all_fields: dict[str, FieldDefinition],
    ) -> FieldDefinition:
        """
        Resolve the element type of a plain (non-collection) array field.

        ``?Item[]`` is an array of nullable items: the field type becomes
        ``(\\App\\Dto\\ItemDto|null)[]`` and ``singular_nullable`` is set.
        The singular name is derived when the field name has a distinct,
        unused singular form; plain arrays get no per-element accessor, so
        an unresolvable name is left unset instead of failing.
        """
        field.is_array = True
        field.singular_type = self.resolver.singular_type(field.type)
        if not field.singular_type:
            return field

        if self.classifier.is_valid_dto_name(field.singular_type):
            field.singular_type = self.resolver.dto_type_to_class(field.singular_type, namespace, self.suffix)
            field.singular_class = field.singular_type

        field.singular_nullable = field.type.startswith("?")

        match = _DTO_ARRAY.match(field.type)
        if match:
            field.type = self.resolver.dto_type_to_class(match.group(1), namespace, self.suffix) + "[]"
        elif field.singular_nullable:
            field.type = f"({field.singular_type}|null)[]"

        if not field.singular:
            singular = singularize(field.name)
            if singular != field.name and singular not in all_fields:
                field.singular = singular

        return field

    def complete_collection_singular(
        self,
        field: FieldDefinition,
        dto_name: str,
        namespace: str,
        all_fields: dict[str, FieldDefinition],
    ) -> FieldDefinition:
        """Fill in the element type and, unless given, derive the singular name."""
        if not field.collection and not field.collection_type:
            return field

        field.singular_type = self.resolver.singular_type(field.type)
        if field.singular_type and self.classifier.is_valid_dto_name(field.singular_type):
            field.singular_type = self.resolver.dto_type_to_class(field.singular_type, namespace, self.suffix)
            field.singular_class = field.singular_type

        if field.singular:
            return field

        singular = singularize(field.name)
        if singular == field.name:
            raise CollectionConfigError(
                f"Cannot auto-singularize field name `{field.name}` in `{dto_name}` DTO.",
                dto_name=dto_name,
                field_name=field.name,
                hint=(
                    f"The field name `{field.name}` has no singular form. "
                    f'Add an explicit `singular` attribute (e.g., singular="{field.name}Item").'
                ),
            )

        if singular in all_fields:
            raise CollectionConfigError(
                f"Auto-generated singular `{singular}` for collection field `{field.name}` "
                f"in `{dto_name}` DTO collides with existing field.",
                dto_name=dto_name,
                field_name=field.name,
                hint="Add an explicit `singular` attribute with a unique name to avoid this collision.",
            )

        field.singular = singular
        return field

    def complete_field_type_hints(self, field: FieldDefinition, namespace: str) -> FieldDefinition:
        if field.dto:
            class_name = self.resolver.dto_type_to_class(field.dto, namespace, self.suffix)
            field.type = class_name
            field.type_hint = class_name
        else:
            field.type_hint = field.type

        field.type_hint = self.resolver.type_hint(field.type_hint)
        field.accessor_name = field_name_to_accessor_name(field.name)

        # Unions with array members lose precision in the hint; keep it for docs
        if self.classifier.is_union(field.type) and field.type_hint == "array" and not field.collection:
            field.doc_block_type = field.type

        return field

    def complete_collection_type_hints(self, field: FieldDefinition) -> FieldDefinition:
        if not field.collection:
            return field

        if field.collection_type == "array":
            field.type_hint = "array"
            field.doc_block_type = self.array_shape_builder.build_generic_array_type(field)
        else:
            field.type_hint = field.collection_type
            field.type += "|" + field.type_hint
            field.doc_block_type = self.array_shape_builder.build_generic_collection_type(field)

        return field

    def complete_array_type_hints(self, field: FieldDefinition) -> FieldDefinition:
        if not field.is_array:
            return field

        if field.type != "array":
            field.type_hint = "array"
            field.doc_block_type = self.array_shape_builder.build_generic_array_type(field)

        return field

    def complete_nullable_type_hints(self, field: FieldDefinition) -> FieldDefinition:
        """Derive ``?T`` (single type) or ``T|null`` (union) variants for nullable fields."""
        if not field.type_hint or not self.scalar_and_return_types:
            return field

        field.return_type_hint = field.type_hint
        if field.nullable:
            field.nullable_type_hint = self._nullable(field.type_hint)
            field.nullable_return_type_hint = field.nullable_type_hint

        return field

    def complete_singular_type_hints(self, field: FieldDefinition) -> FieldDefinition:
        if not field.collection:
            return field

        if field.singular_type:
            field.singular_type_hint = self.resolver.type_hint(field.singular_type)

        if field.singular_type_hint and self.scalar_and_return_types:
            field.singular_return_type_hint = field.singular_type_hint
            if field.singular_nullable:
                field.singular_nullable_return_type_hint = self._nullable(field.singular_type_hint)

        if field.singular:
            field.singular_accessor_name = field_name_to_accessor_name(field.singular)
        field.key_type = self.associative_key_type if field.associative else "int"

        return field

    def _nullable(self, type_hint: str) -> str:
        if self.classifier.is_union(type_hint):
            return f"{type_hint}|null"
        return f"?{type_hint}"
