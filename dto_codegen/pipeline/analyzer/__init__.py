"""
Analyzer module.

Contains type classification and resolution, field completion,
validation, inheritance resolution and dependency analysis.
"""

from __future__ import annotations

from .array_shape_builder import ArrayShapeBuilder
from .dependency_analyzer import DependencyAnalyzer, DependencyGraph
from .dto_validator import DtoValidator
from .extends_resolver import ExtendsResolver
from .field_completor import FieldCompletor
from .type_classifier import TypeClassifier, TypeKind, resolve_class
from .type_resolver import TypeResolver, dto_name_from_type

__all__ = [
    "ArrayShapeBuilder",
    "DependencyAnalyzer",
    "DependencyGraph",
    "DtoValidator",
    "ExtendsResolver",
    "FieldCompletor",
    "TypeClassifier",
    "TypeKind",
    "TypeResolver",
    "dto_name_from_type",
    "resolve_class",
]
