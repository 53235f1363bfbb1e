"""
Schema module.

Contains the resolved DTO nodes, the config file engines and finder, and
the fluent in-process schema builder.
"""

from __future__ import annotations

from .engines import JsonEngine, SchemaEngine, XmlEngine, YamlEngine, get_engine, normalize_schema
from .finder import Finder
from .nodes import DtoDefinition, FieldDefinition, SchemaSet
from .schema_builder import Dto, Field, Schema

__all__ = [
    "DtoDefinition",
    "FieldDefinition",
    "SchemaSet",
    "SchemaEngine",
    "YamlEngine",
    "JsonEngine",
    "XmlEngine",
    "get_engine",
    "normalize_schema",
    "Finder",
    "Schema",
    "Dto",
    "Field",
]
