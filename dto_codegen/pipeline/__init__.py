"""
Pipeline - schema resolution for the DTO generator.

This module turns declarative DTO schemas into a resolved, cross-referenced
model ready for emission:

1. Phase 1 (Schema): Discover and parse config files into raw schema maps
2. Phase 2 (Analyzer): Validate, classify types and complete fields
3. Phase 3 (Analyzer): Check dependencies for cycles and resolve inheritance
4. Phase 4 (Builder): Attach namespaces, array shapes and metadata
5. Phase 5 (Backends): Optional emission of TypeScript or JSON Schema
"""

from __future__ import annotations

from .backends import JsonSchemaBackend, TypeScriptBackend
from .builder import Builder
from .config import BuilderConfig
from .schema import DtoDefinition, FieldDefinition, SchemaSet, get_engine

__all__ = [
    "Builder",
    "BuilderConfig",
    "DtoDefinition",
    "FieldDefinition",
    "SchemaSet",
    "get_engine",
    "TypeScriptBackend",
    "JsonSchemaBackend",
]
