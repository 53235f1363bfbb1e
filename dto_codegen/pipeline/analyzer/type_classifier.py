"""
Type-string classification.

A field type is a tagged string rather than a parsed AST:

- ``T[]`` is an array (or collection) of ``T``; ``?T[]`` allows null elements
- ``A|B`` is a union of scalar types
- ``\\pkg\\module\\Class`` is a reference to an importable Python class
- other bare identifiers are scalar keywords or PascalCase DTO names
"""

from __future__ import annotations

import builtins
import importlib
import inspect
import re
from enum import Enum
from functools import lru_cache

from ...inflector import camelize, underscore

SCALAR_TYPES = ("int", "float", "string", "bool", "callable", "iterable", "object")

# Only valid in documentation; they produce no type hint
DOC_ONLY_TYPES = ("resource", "mixed")

_DTO_NAME = re.compile(r"^[A-Z][a-zA-Z0-9/]+$")
_FIELD_NAME = re.compile(r"^[a-zA-Z][a-zA-Z0-9]+$")


class TypeKind(Enum):
    """Category a valid type string falls into."""

    SCALAR = "scalar"
    ARRAY = "array"
    COLLECTION = "collection"
    DTO = "dto"
    CLASS = "class"


@lru_cache(maxsize=None)
def resolve_class(type_string: str) -> type | None:
    """Resolve a ``\\``-prefixed class reference to the class object.

    ``\\datetime\\datetime`` resolves to ``datetime.datetime``; the longest
    importable module prefix is used and the remaining segments are looked
    up as attributes. Returns None when nothing importable matches.
    """
    if not type_string.startswith("\\"):
        return None

    path = type_string[1:].split("\\")
    if not all(part.isidentifier() for part in path):
        return None

    if len(path) == 1:
        obj = getattr(builtins, path[0], None)
        return obj if inspect.isclass(obj) else None

    for split in range(len(path) - 1, 0, -1):
        try:
            obj = importlib.import_module(".".join(path[:split]))
        except ImportError:
            continue
        for attribute in path[split:]:
            obj = getattr(obj, attribute, None)
            if obj is None:
                break
        if inspect.isclass(obj):
            return obj

    return None


class TypeClassifier:
    """Pure predicates over type strings."""

    def __init__(self, scalar_types: tuple[str, ...] = SCALAR_TYPES, doc_only_types: tuple[str, ...] = DOC_ONLY_TYPES):
        self.scalar_types = scalar_types
        self.doc_only_types = doc_only_types

    def is_valid_type(self, type_string: str) -> bool:
        """Check if a type is usable for a DTO field at all."""
        return self.classify(type_string) is not None

    def classify(self, type_string: str, collection: bool = False) -> TypeKind | None:
        """
        Classify a type string into exactly one category.

        DTO and class references are checked before the array forms, since
        ``Item[]`` is array-shaped and DTO-element-shaped at the same time.

        Args:
            type_string: The type to classify
            collection: Whether the field is flagged as a collection

        Returns:
            The TypeKind, or None when the type is not valid
        """
        if self.is_scalar(type_string, self.doc_only_types):
            return TypeKind.SCALAR
        if self.is_valid_dto_name(type_string):
            return TypeKind.DTO
        if self.is_class_reference(type_string):
            return TypeKind.CLASS
        if collection and self.is_collection_type(type_string):
            return TypeKind.COLLECTION
        if self.is_array_type(type_string):
            return TypeKind.ARRAY
        return None

    def is_scalar(self, type_string: str, extra_allowed: tuple[str, ...] | list[str] = ()) -> bool:
        """
        Check if every member of a (possibly union) type is a scalar keyword.

        A single non-union ``T[]`` is an array, not a scalar. Inside a union
        each member may carry one ``[]``; callers then degrade the type hint
        to ``array``.
        """
        whitelist = set(self.scalar_types) | set(extra_allowed)
        members = type_string.split("|")

        if len(members) == 1 and members[0].endswith("[]"):
            return False

        members = [member[:-2] if member.endswith("[]") else member for member in members]
        return all(member in whitelist for member in members)

    def is_array_type(self, type_string: str) -> bool:
        """Check for ``array``, ``T[]`` or ``?T[]`` with a valid element type."""
        if type_string == "array":
            return True
        if not type_string.endswith("[]"):
            return False

        element = type_string[:-2]
        if element.startswith("?"):
            element = element[1:]
        return self._is_valid_element(element)

    def is_collection_type(self, type_string: str) -> bool:
        """Check for ``array`` or ``T[]``; collections do not accept ``?T[]``."""
        if type_string == "array":
            return True
        if not type_string.endswith("[]"):
            return False
        return self._is_valid_element(type_string[:-2])

    def is_valid_dto_name(self, name: str) -> bool:
        """
        Check if a name is a valid DTO name.

        Names are PascalCase, optionally split into ``/`` namespace segments.
        Each segment must survive an underscore/camelize round trip, which
        rejects names such as ``HTTPClient`` that would otherwise map to a
        second, conflicting class name.
        """
        if not _DTO_NAME.match(name):
            return False
        return all(piece == camelize(underscore(piece)) for piece in name.split("/"))

    def is_valid_field_name(self, name: str) -> bool:
        return bool(_FIELD_NAME.match(name))

    def is_class_reference(self, type_string: str) -> bool:
        return resolve_class(type_string) is not None

    def is_union(self, type_string: str) -> bool:
        return "|" in type_string

    def _is_valid_element(self, element: str) -> bool:
        return self.is_scalar(element) or self.is_valid_dto_name(element) or self.is_class_reference(element)
