"""
Type resolution for classified type strings.

Turns type strings into type hints, element types and class names, and
introspects referenced classes for enum backing and serialization support.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any

from ...dto import FromArrayToArray, JsonSerializable
from .type_classifier import TypeClassifier, resolve_class


def dto_name_from_type(type_string: str, known_names: Iterable[str], suffix: str) -> str | None:
    """
    Find the known DTO a type string refers to.

    Handles logical names (``Item``, ``Sub/Item``), suffixed names
    (``ItemDto``) and class forms (``\\App\\Dto\\Sub\\ItemDto``), with any
    ``[]``, ``?`` or ``(...|null)`` decoration.

    Args:
        type_string: The type to inspect
        known_names: Names of the DTOs in the schema set
        suffix: Class-name suffix appended to DTO names

    Returns:
        The logical DTO name, or None if the type refers to no known DTO
    """
    known = set(known_names)

    inner = type_string
    while inner.endswith("[]"):
        inner = inner[:-2]
    inner = inner.strip("()")
    members = [member for member in inner.split("|") if member != "null"]
    if len(members) != 1:
        return None
    inner = members[0].lstrip("?")
    if not inner:
        return None

    is_class_form = inner.startswith("\\")
    parts = inner.lstrip("\\").split("\\") if is_class_form else inner.split("/")

    for start in range(len(parts)):
        tail = parts[start:]
        last = tail[-1]
        candidates = []
        if suffix and last.endswith(suffix) and len(last) > len(suffix):
            candidates.append("/".join(tail[:-1] + [last[: -len(suffix)]]))
        if not is_class_form:
            candidates.append("/".join(tail))
        for candidate in candidates:
            if candidate in known:
                return candidate

    return None


class TypeResolver:
    """Resolves and transforms types for DTO generation."""

    def __init__(self, classifier: TypeClassifier, scalar_and_return_types: bool = True):
        self.classifier = classifier
        self.scalar_and_return_types = scalar_and_return_types

    def type_hint(self, type_string: str) -> str | None:
        """
        Get the type hint for a type.

        Unions of scalars pass through unchanged, except that a union with
        any ``T[]`` member collapses to ``array``: such unions cannot be
        expressed as a hint, and the full union survives only in docs.
        """
        if self.classifier.is_scalar(type_string):
            members = type_string.split("|")
            if len(members) > 1:
                if any(member.endswith("[]") for member in members):
                    return "array"
                return type_string
        if type_string in self.classifier.doc_only_types:
            return None
        if not self.scalar_and_return_types and type_string in self.classifier.scalar_types:
            return None
        return type_string

    def singular_type(self, type_string: str) -> str | None:
        """Strip one ``[]`` and an optional leading ``?``; None unless the element is valid."""
        if not type_string.endswith("[]"):
            return None

        element = type_string[:-2]
        if element.startswith("?"):
            element = element[1:]

        if not (
            self.classifier.is_scalar(element)
            or self.classifier.is_valid_dto_name(element)
            or self.classifier.is_class_reference(element)
        ):
            return None
        return element

    def collection_type(self, field: Any, default_collection_type: str) -> str:
        """Collection class of a field: explicit, configured default, or plain ``array``."""
        if field.collection_type:
            return field.collection_type
        if field.collection:
            return default_collection_type
        return "array"

    def enum_backing_kind(self, class_ref: str) -> str | None:
        """
        Get the enum kind of a referenced class.

        Returns:
            None if the class is not an Enum, "unit" for a plain Enum, or the
            scalar type backing its values ("int", "string", "float")
        """
        cls = resolve_class(class_ref)
        if cls is None or not issubclass(cls, Enum):
            return None
        if issubclass(cls, int):
            return "int"
        if issubclass(cls, str):
            return "string"
        if issubclass(cls, float):
            return "float"
        return "unit"

    def detect_auto_serialize(self, class_ref: str) -> str | None:
        """
        Detect how values of a referenced class are serialized.

        Round-trip support wins over a one-way ``to_array`` method, and
        JSON-safe classes need no transform at all.
        """
        cls = resolve_class(class_ref)
        if cls is None:
            return None
        if issubclass(cls, FromArrayToArray):
            return "FromArrayToArray"
        if issubclass(cls, JsonSerializable):
            return None
        if callable(getattr(cls, "to_array", None)):
            return "array"
        return None

    def dto_type_to_class(self, dto_name: str, namespace: str, suffix: str) -> str:
        """Convert a DTO name to its class reference: ``Sub/Item`` -> ``\\App\\Dto\\Sub\\ItemDto``."""
        class_name = dto_name.replace("/", "\\") + suffix
        return f"\\{namespace}\\Dto\\{class_name}"
