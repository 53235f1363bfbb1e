"""
Runtime base classes and serialization interfaces for generated DTOs.

The generator introspects these to decide how an ``extends`` target or a
class-typed field has to be handled; generated classes derive from them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar


class FromArrayToArray(ABC):
    """A value object that can be rebuilt from, and turned back into, a plain dict."""

    @classmethod
    @abstractmethod
    def create_from_array(cls, data: dict[str, Any]) -> FromArrayToArray:
        """Build an instance from its array form."""

    @abstractmethod
    def to_array(self) -> dict[str, Any]:
        """Return the array form of this instance."""


class JsonSerializable(ABC):
    """A value object that already knows its JSON-safe representation."""

    @abstractmethod
    def json_serialize(self) -> Any:
        """Return a value that ``json.dumps`` accepts as-is."""


class AbstractDto:
    """Base for mutable generated DTOs."""

    immutable: ClassVar[bool] = False

    # Populated by generated subclasses: field name -> minimal field metadata
    _metadata: ClassVar[dict[str, dict[str, Any]]] = {}


class AbstractImmutableDto:
    """Base for immutable generated DTOs.

    Not a subclass of :class:`AbstractDto`; mutable and immutable
    hierarchies are disjoint.
    """

    immutable: ClassVar[bool] = True

    _metadata: ClassVar[dict[str, dict[str, Any]]] = {}


ABSTRACT_DTO = "\\dto_codegen\\dto\\AbstractDto"
ABSTRACT_IMMUTABLE_DTO = "\\dto_codegen\\dto\\AbstractImmutableDto"
