"""
Documentation-only array types for DTOs.

Builds generic element types (``array<int, ItemDto>``) for collection and
array fields, and recursive array shapes
(``array{name: string|null, items: array<int, array{...}>}``) describing a
DTO's serialized form for static-analysis annotations.
"""

from __future__ import annotations

from typing import Any

from ..schema.nodes import DtoDefinition, FieldDefinition
from .type_resolver import dto_name_from_type


class ArrayShapeBuilder:
    """Builds array-shape and generic doc types."""

    def __init__(self, suffix: str = "Dto", associative_key_type: str = "string"):
        self.suffix = suffix
        self.associative_key_type = associative_key_type

    def build_generic_array_type(self, field: FieldDefinition) -> str:
        """Convert ``string[]`` to ``array<int, string>``."""
        element_type = field.singular_type
        if not element_type and field.type.endswith("[]"):
            element_type = field.type[:-2]

        if field.singular_nullable and element_type:
            element_type += "|null"

        return f"array<{self._key_type(field)}, {element_type or 'mixed'}>"

    def build_generic_collection_type(self, field: FieldDefinition) -> str:
        """Convert an ``ItemDto[]`` collection to ``\\collections\\UserList<int, ItemDto>``."""
        element_type = field.singular_type or "mixed"
        if field.singular_nullable and element_type != "mixed":
            element_type += "|null"

        return f"{field.collection_type}<{self._key_type(field)}, {element_type}>"

    def build_array_shape(
        self,
        fields: dict[str, FieldDefinition],
        all_dtos: dict[str, DtoDefinition] | None = None,
        dto: DtoDefinition | None = None,
        _stack: tuple[str, ...] = (),
    ) -> str:
        """
        Build the array shape of a DTO.

        Parent fields come first when the DTO extends another DTO, so the
        child's shape stays compatible with its parent's.

        Args:
            fields: The DTO's own fields
            all_dtos: All DTOs, for inlining nested shapes and parents
            dto: The DTO itself, for inheritance
            _stack: DTOs currently being expanded (guards self references)

        Returns:
            The shape string
        """
        all_dtos = all_dtos or {}
        all_fields: dict[str, FieldDefinition] = {}

        if dto is not None:
            if dto.name:
                _stack = _stack + (dto.name,)
            if dto.extends:
                parent_name = dto_name_from_type(dto.extends, all_dtos, self.suffix)
                if parent_name:
                    all_fields = self._collect_inherited_fields(all_dtos[parent_name], all_dtos)

        all_fields.update(fields)

        parts = [f"{name}: {self._field_shape_type(field, all_dtos, _stack)}" for name, field in all_fields.items()]
        return "array{" + ", ".join(parts) + "}"

    def _collect_inherited_fields(self, dto: DtoDefinition, all_dtos: dict[str, DtoDefinition]) -> dict[str, FieldDefinition]:
        fields: dict[str, FieldDefinition] = {}

        if dto.extends:
            parent_name = dto_name_from_type(dto.extends, all_dtos, self.suffix)
            if parent_name and parent_name != dto.name:
                fields = self._collect_inherited_fields(all_dtos[parent_name], all_dtos)

        fields.update(dto.fields)
        return fields

    def _field_shape_type(self, field: FieldDefinition, all_dtos: dict[str, DtoDefinition], stack: tuple[str, ...]) -> str:
        if field.collection or field.is_array:
            element_type = field.singular_type or "mixed"
            nested = self._nested_shape(element_type, all_dtos, stack)
            if nested:
                element_type = nested
            if field.singular_nullable:
                element_type += "|null"
            type_string = f"array<{self._key_type(field)}, {element_type}>"
        elif field.dto:
            type_string = self._nested_shape(field.dto, all_dtos, stack) or "array<string, mixed>"
        else:
            type_string = field.type_hint or field.type or "mixed"

        if field.nullable:
            type_string += "|null"

        return type_string

    def _nested_shape(self, type_string: str, all_dtos: dict[str, DtoDefinition], stack: tuple[str, ...]) -> str | None:
        dto_name = dto_name_from_type(type_string, all_dtos, self.suffix)
        if not dto_name:
            return None
        if dto_name in stack:
            return "array<string, mixed>"
        nested = all_dtos[dto_name]
        return self.build_array_shape(nested.fields, all_dtos, nested, stack)

    def _key_type(self, field: Any) -> str:
        return self.associative_key_type if field.associative else "int"
