"""
Fluent in-process schema definitions.

Builds the same raw schema map the file engines produce::

    schema = Schema.create().dto(
        Dto.create("User").fields(
            Field.int("id").required(),
            Field.string("email"),
            Field.collection("roles", "Role").singular("role"),
        )
    )
    Builder().build_from_schemas([schema.to_dict()])
"""

from __future__ import annotations

from typing import Any

_UNSET = object()

# Optional field attributes, in output order: attribute name -> config key
_FIELD_OPTIONS = (
    ("collection_type", "collectionType"),
    ("singular_name", "singular"),
    ("key", "key"),
    ("deprecated_message", "deprecated"),
    ("factory_method", "factory"),
    ("serialize_mode", "serialize"),
    ("map_from_key", "mapFrom"),
    ("map_to_key", "mapTo"),
    ("transform_from_callable", "transformFrom"),
    ("transform_to_callable", "transformTo"),
)


class Field:
    """Fluent definition of one DTO field."""

    def __init__(self, name: str, type: str):
        self.name = name
        self.type = type
        self.is_required = False
        self.default_value: Any = _UNSET
        self.is_collection = False
        self.is_associative = False
        self.collection_type: str | None = None
        self.singular_name: str | None = None
        self.key: str | None = None
        self.deprecated_message: str | None = None
        self.factory_method: str | None = None
        self.serialize_mode: str | None = None
        self.map_from_key: str | None = None
        self.map_to_key: str | None = None
        self.transform_from_callable: str | None = None
        self.transform_to_callable: str | None = None

    @classmethod
    def string(cls, name: str) -> Field:
        return cls(name, "string")

    @classmethod
    def int(cls, name: str) -> Field:
        return cls(name, "int")

    @classmethod
    def float(cls, name: str) -> Field:
        return cls(name, "float")

    @classmethod
    def bool(cls, name: str) -> Field:
        return cls(name, "bool")

    @classmethod
    def array(cls, name: str, element_type: str | None = None) -> Field:
        return cls(name, f"{element_type}[]" if element_type else "array")

    @classmethod
    def dto(cls, name: str, dto_name: str) -> Field:
        return cls(name, dto_name)

    @classmethod
    def collection(cls, name: str, element_type: str) -> Field:
        field = cls(name, f"{element_type}[]")
        field.is_collection = True
        return field

    @classmethod
    def cls(cls, name: str, class_name: str) -> Field:
        """A field holding an instance of an importable class (``datetime.date`` or ``\\datetime\\date``)."""
        class_name = class_name.replace(".", "\\")
        if not class_name.startswith("\\"):
            class_name = "\\" + class_name
        return cls(name, class_name)

    @classmethod
    def union(cls, name: str, *types: str) -> Field:
        if len(types) < 2:
            raise ValueError("Union types require at least 2 types")
        return cls(name, "|".join(types))

    @classmethod
    def of(cls, name: str, type: str) -> Field:
        return cls(name, type)

    def required(self) -> Field:
        self.is_required = True
        return self

    def default(self, value: Any) -> Field:
        self.default_value = value
        return self

    def as_collection(self, collection_type: str | None = None) -> Field:
        self.is_collection = True
        self.collection_type = collection_type
        return self

    def singular(self, name: str) -> Field:
        self.singular_name = name
        return self

    def associative(self, key: str | None = None) -> Field:
        self.is_associative = True
        self.key = key
        return self

    def deprecated(self, message: str = "") -> Field:
        self.deprecated_message = message or "true"
        return self

    def factory(self, method: str) -> Field:
        self.factory_method = method
        return self

    def serialize(self, mode: str) -> Field:
        self.serialize_mode = mode
        return self

    def map_from(self, source_key: str) -> Field:
        self.map_from_key = source_key
        return self

    def map_to(self, output_key: str) -> Field:
        self.map_to_key = output_key
        return self

    def transform_from(self, callable_name: str) -> Field:
        self.transform_from_callable = callable_name
        return self

    def transform_to(self, callable_name: str) -> Field:
        self.transform_to_callable = callable_name
        return self

    def to_dict(self) -> dict[str, Any] | str:
        """Return the field config; a field with no attributes is just its type string."""
        config: dict[str, Any] = {"type": self.type}
        if self.is_required:
            config["required"] = True
        if self.default_value is not _UNSET:
            config["defaultValue"] = self.default_value
        if self.is_collection:
            config["collection"] = True
        if self.is_associative:
            config["associative"] = True
        for attribute, key in _FIELD_OPTIONS:
            value = getattr(self, attribute)
            if value is not None:
                config[key] = value

        if len(config) == 1:
            return self.type
        return config


class Dto:
    """Fluent definition of one DTO."""

    def __init__(self, name: str):
        self.name = name
        self.is_immutable = False
        self.parent: str | None = None
        self.deprecated_message: str | None = None
        self.trait_names: list[str] = []
        self.field_list: list[Field] = []

    @classmethod
    def create(cls, name: str) -> Dto:
        return cls(name)

    @classmethod
    def immutable(cls, name: str) -> Dto:
        return cls(name).as_immutable()

    def fields(self, *fields: Field) -> Dto:
        self.field_list.extend(fields)
        return self

    def field(self, field: Field) -> Dto:
        self.field_list.append(field)
        return self

    def extends(self, parent_name: str) -> Dto:
        self.parent = parent_name
        return self

    def as_immutable(self) -> Dto:
        self.is_immutable = True
        return self

    def deprecated(self, message: str = "") -> Dto:
        self.deprecated_message = message or "true"
        return self

    def traits(self, *traits: str) -> Dto:
        self.trait_names.extend(traits)
        return self

    def to_dict(self) -> dict[str, Any]:
        config: dict[str, Any] = {}
        if self.is_immutable:
            config["immutable"] = True
        if self.parent is not None:
            config["extends"] = self.parent
        if self.deprecated_message is not None:
            config["deprecated"] = self.deprecated_message
        if self.trait_names:
            config["traits"] = list(self.trait_names)
        config["fields"] = {field.name: field.to_dict() for field in self.field_list}
        return config


class Schema:
    """A set of fluent DTO definitions."""

    def __init__(self):
        self.dto_list: list[Dto] = []

    @classmethod
    def create(cls) -> Schema:
        return cls()

    def dto(self, dto: Dto) -> Schema:
        self.dto_list.append(dto)
        return self

    def dtos(self, *dtos: Dto) -> Schema:
        self.dto_list.extend(dtos)
        return self

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Return the schema in config file shape (DTO name -> definition)."""
        return {dto.name: dto.to_dict() for dto in self.dto_list}
