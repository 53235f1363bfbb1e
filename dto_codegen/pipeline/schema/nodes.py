"""
Resolved DTO model.

These nodes carry a DTO definition through completion, inheritance and
namespace resolution. Cross references between DTOs are always stored as
name strings and looked up in the schema set, never as object references.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from dataclasses import fields as dataclass_fields
from typing import Any

from ...inflector import underscore, variable


@dataclass
class FieldDefinition:
    """A field of a DTO.

    Raw config and ``to_dict()`` use camelCase keys (``defaultValue``,
    ``collectionType``); attributes are their snake_case equivalents.
    Keys that do not map to an attribute are kept in ``extra``.
    """

    name: str = ""
    type: str = ""
    required: bool = False
    default_value: Any = None
    nullable: bool = True
    deprecated: str | None = None

    # Classification
    dto: str | None = None  # Logical DTO name when the field holds another DTO
    is_class: bool = False
    is_array: bool = False
    enum: str | None = None  # "unit", backing scalar, or None
    serialize: str | None = None
    factory: str | None = None

    # Collections
    collection: bool = False
    collection_type: str | None = None
    associative: bool = False
    key: str | None = None
    singular: str | None = None
    singular_type: str | None = None
    singular_class: str | None = None
    singular_nullable: bool = False

    # External names and value transforms
    map_from: str | None = None
    map_to: str | None = None
    transform_from: str | None = None
    transform_to: str | None = None

    # Validation constraints (documentation for the emitted code only)
    min_length: int | None = None
    max_length: int | None = None
    min: int | float | None = None
    max: int | float | None = None
    pattern: str | None = None

    lazy: bool = False

    # Filled in by the completion phases
    type_hint: str | None = None
    return_type_hint: str | None = None
    nullable_type_hint: str | None = None
    nullable_return_type_hint: str | None = None
    doc_block_type: str | None = None
    singular_type_hint: str | None = None
    singular_return_type_hint: str | None = None
    singular_nullable_return_type_hint: str | None = None
    key_type: str | None = None
    accessor_name: str | None = None
    singular_accessor_name: str | None = None

    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FieldDefinition:
        """Build a field from its raw (camelCase) config map."""
        known = {f.name for f in dataclass_fields(cls)} - {"extra"}
        kwargs: dict[str, Any] = {}
        extra: dict[str, Any] = {}
        for key, value in data.items():
            attribute = underscore(key)
            if attribute in known:
                kwargs[attribute] = value
            else:
                extra[key] = value
        return cls(extra=extra, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase map consumed by the emitters."""
        result: dict[str, Any] = {}
        for f in dataclass_fields(self):
            if f.name == "extra":
                continue
            result[variable(f.name)] = getattr(self, f.name)
        result.update(self.extra)
        return result


@dataclass
class DtoDefinition:
    """A named DTO and its ordered fields."""

    name: str = ""
    fields: dict[str, FieldDefinition] = field(default_factory=dict)

    immutable: bool = False
    extends: str | None = None
    traits: list[str] = field(default_factory=list)
    deprecated: str | None = None

    # Placement, filled in by the builder
    namespace: str = ""
    class_name: str = ""

    # Hand-off data for the emitters
    array_shape: str = ""
    meta_data: dict[str, dict[str, Any]] = field(default_factory=dict)
    options: dict[str, Any] = field(default_factory=dict)

    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result = {
            "name": self.name,
            "className": self.class_name,
            "namespace": self.namespace,
            "extends": self.extends,
            "immutable": self.immutable,
            "traits": list(self.traits),
            "deprecated": self.deprecated,
            "fields": {name: f.to_dict() for name, f in self.fields.items()},
            "arrayShape": self.array_shape,
            "metaData": self.meta_data,
            "options": self.options,
        }
        result.update(self.extra)
        return result


# All DTOs of one generation run, keyed by DTO name
SchemaSet = dict[str, DtoDefinition]
