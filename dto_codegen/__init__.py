"""DTO Code Generator

A Python package for resolving declarative DTO schemas (YAML, JSON, XML or
an in-process fluent builder) into a fully cross-referenced type model,
with TypeScript and JSON Schema emission.
"""

__version__ = "1.0.0"

from .errors import (
    CollectionConfigError,
    CycleError,
    DtoConfigError,
    EngineError,
    FieldTypeError,
    InheritanceError,
    MergeConflictError,
    MethodCollisionError,
    NameFormatError,
)
from .pipeline import (
    Builder,
    BuilderConfig,
    DtoDefinition,
    FieldDefinition,
    JsonSchemaBackend,
    SchemaSet,
    TypeScriptBackend,
)

__all__ = [
    "Builder",
    "BuilderConfig",
    "DtoDefinition",
    "FieldDefinition",
    "SchemaSet",
    "TypeScriptBackend",
    "JsonSchemaBackend",
    "DtoConfigError",
    "NameFormatError",
    "FieldTypeError",
    "CollectionConfigError",
    "MergeConflictError",
    "InheritanceError",
    "CycleError",
    "MethodCollisionError",
    "EngineError",
]
