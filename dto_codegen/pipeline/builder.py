"""
Builder - orchestrates the DTO resolution pipeline.

Phases, in order, all-or-nothing for one run:

1. Discover and parse config files (finder, engine)
2. Merge declarations of the same DTO across files
3. Per DTO: validate, complete fields, complete hints, attach defaults
4. Dependency and cycle analysis over the whole set
5. Extends resolution, config defaults, namespace paths
6. Per DTO: array shape and metadata for the emitters
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..dto import ABSTRACT_DTO, ABSTRACT_IMMUTABLE_DTO
from ..logging import get_logger
from .analyzer import (
    ArrayShapeBuilder,
    DependencyAnalyzer,
    DtoValidator,
    ExtendsResolver,
    FieldCompletor,
    TypeClassifier,
    TypeResolver,
)
from .config import BuilderConfig
from .schema.engines import SchemaEngine, YamlEngine, normalize_schema
from .schema.finder import Finder
from .schema.nodes import DtoDefinition, FieldDefinition, SchemaSet

logger = get_logger("builder")

# A schema map, optionally paired with the file it came from
SchemaInput = dict[str, Any] | tuple[str | None, dict[str, Any]]


class Builder:
    """Builds the resolved schema set from DTO config."""

    # Field keys generated DTOs need at runtime
    META_DATA_KEYS = (
        "name",
        "type",
        "isClass",
        "enum",
        "serialize",
        "factory",
        "required",
        "defaultValue",
        "dto",
        "collectionType",
        "singularType",
        "singularTypeHint",
        "singularNullable",
        "associative",
        "key",
        "mapFrom",
        "mapTo",
        "transformFrom",
        "transformTo",
    )

    def __init__(
        self,
        engine: SchemaEngine | None = None,
        config: BuilderConfig | None = None,
        finder: Finder | None = None,
    ):
        """
        Initialize the builder.

        Args:
            engine: Config file engine (defaults to YAML)
            config: Build configuration
            finder: Config file discovery
        """
        self.engine = engine or YamlEngine()
        self.config = config or BuilderConfig()
        self.finder = finder or Finder()

        self.classifier = TypeClassifier()
        resolver = TypeResolver(self.classifier, self.config.scalar_and_return_types)
        self.array_shape_builder = ArrayShapeBuilder(self.config.suffix, self.config.associative_key_type)

        self.dto_validator = DtoValidator(self.classifier)
        self.field_completor = FieldCompletor(self.classifier, resolver, self.array_shape_builder, self.config)
        self.extends_resolver = ExtendsResolver(self.config.suffix)
        self.dependency_analyzer = DependencyAnalyzer(
            self.config.suffix,
            allow_nullable_self_reference=self.config.allow_nullable_self_reference,
        )

    def build(self, config_path: str | Path, namespace: str | None = None) -> SchemaSet:
        """
        Build the schema set from a config file or directory.

        Args:
            config_path: A config file, or a directory of config files
            namespace: Root namespace, overriding the configured one

        Returns:
            The resolved schema set
        """
        files = self.finder.collect(config_path, self.engine.extension)
        self.engine.validate(files)
        logger.info("Building DTOs from %d file(s)", len(files))

        return self.build_from_schemas([(file, self.engine.parse_file(file)) for file in files], namespace)

    def build_from_schemas(self, schemas: Iterable[SchemaInput], namespace: str | None = None) -> SchemaSet:
        """
        Build the schema set from already parsed schema maps.

        Args:
            schemas: Schema maps in merge order, as plain maps, fluent
                ``Schema`` objects, or ``(source, map)`` pairs
            namespace: Root namespace, overriding the configured one

        Returns:
            The resolved schema set
        """
        namespace = namespace or self.config.namespace

        sources = []
        for item in schemas:
            source, schema = item if isinstance(item, tuple) else (None, item)
            if hasattr(schema, "to_dict"):
                schema = schema.to_dict()
            sources.append((source, normalize_schema(schema, source)))

        return self.create_dtos(self.merge_schemas(sources), namespace)

    def merge_schemas(self, sources: list[tuple[str | None, dict[str, Any]]]) -> dict[str, dict[str, Any]]:
        """
        Merge declarations of the same DTO across sources.

        Fields are united; for DTO attributes and for field attributes the
        first declaration wins. A field declared with two different types
        raises MergeConflictError.
        """
        result: dict[str, dict[str, Any]] = {}
        origins: dict[str, str | None] = {}

        for source, schema in sources:
            for name, dto in schema.items():
                if name not in result:
                    result[name] = {**dto, "fields": dict(dto.get("fields") or {})}
                    origins[name] = source
                    continue

                existing = result[name]
                self.dto_validator.validate_merge(existing, dto, origins[name], source)
                logger.debug("Merging %s from %s", name, source or "schema")

                for key, value in dto.items():
                    if key != "fields":
                        existing.setdefault(key, value)

                fields = existing["fields"]
                for field_name, field in (dto.get("fields") or {}).items():
                    fields[field_name] = {**field, **fields[field_name]} if field_name in fields else field

        return result

    def create_dtos(self, raw_dtos: dict[str, dict[str, Any]], namespace: str) -> SchemaSet:
        """Run the per-DTO and whole-set phases over merged raw DTOs."""
        schema_set: SchemaSet = {}

        for name, raw_dto in raw_dtos.items():
            self.dto_validator.validate(raw_dto)
            dto = self.field_completor.complete(raw_dto, namespace)
            dto = self.field_completor.complete_meta(dto, namespace)
            self._attach_defaults(dto, raw_dto, namespace)
            schema_set[name] = dto

        self.dependency_analyzer.analyze(schema_set)

        self.extends_resolver.resolve(schema_set)

        options = self.config.to_dict()
        for dto in schema_set.values():
            dto.options = dict(options)

        self.extends_resolver.resolve_namespace_paths(schema_set, namespace)

        for dto in schema_set.values():
            dto.array_shape = self.array_shape_builder.build_array_shape(dto.fields, schema_set, dto)
            dto.meta_data = self.meta_data(dto.fields)

        logger.info("Built %d DTO(s)", len(schema_set))
        return schema_set

    def meta_data(self, fields: dict[str, FieldDefinition]) -> dict[str, dict[str, Any]]:
        """Project fields onto the keys generated DTOs need at runtime."""
        if self.config.debug:
            return {name: field.to_dict() for name, field in fields.items()}

        meta = {}
        for name, field in fields.items():
            data = field.to_dict()
            meta[name] = {key: data[key] for key in self.META_DATA_KEYS if key in data}
        return meta

    def dump(self, schema_set: SchemaSet) -> str:
        """Return the resolved schema set as JSON, keeping DTO and field declaration order."""
        return json.dumps({name: dto.to_dict() for name, dto in schema_set.items()}, indent=2, default=str)

    def _attach_defaults(self, dto: DtoDefinition, raw_dto: dict[str, Any], namespace: str) -> None:
        dto.immutable = bool(raw_dto["immutable"]) if "immutable" in raw_dto else self.config.immutable
        dto.namespace = f"{namespace}\\Dto"
        dto.class_name = dto.name + self.config.suffix
        dto.extends = dto.extends or ABSTRACT_DTO
        dto.traits = normalize_traits(dto.traits)

        if dto.immutable and dto.extends == ABSTRACT_DTO:
            dto.extends = ABSTRACT_IMMUTABLE_DTO


def normalize_traits(traits: str | list[str] | None) -> list[str]:
    """Normalize traits to a list of ``\\``-prefixed class references; strings are comma separated."""
    if not traits:
        return []

    if isinstance(traits, str):
        traits = traits.split(",")

    result = []
    for trait in traits:
        trait = trait.strip()
        if not trait:
            continue
        result.append(trait if trait.startswith("\\") else "\\" + trait)
    return result
