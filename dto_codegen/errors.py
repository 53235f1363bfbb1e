"""
Errors raised while building the DTO schema set.

Every error is a fatal configuration error: the builder never recovers
from one and nothing is handed to the emitters once one is raised.
"""

from __future__ import annotations


class DtoConfigError(ValueError):
    """Base class for invalid DTO configuration.

    Attributes:
        dto_name: Name of the offending DTO, if known
        field_name: Name of the offending field, if any
        hint: Human-actionable suggestion appended to the message
    """

    def __init__(
        self,
        message: str,
        *,
        dto_name: str | None = None,
        field_name: str | None = None,
        hint: str | None = None,
    ):
        self.message = message
        self.dto_name = dto_name
        self.field_name = field_name
        self.hint = hint
        super().__init__(f"{message}\nHint: {hint}" if hint else message)


class NameFormatError(DtoConfigError):
    """A DTO name, field name, or attribute key has the wrong shape."""


class FieldTypeError(DtoConfigError):
    """A field type string cannot be classified."""


class CollectionConfigError(DtoConfigError):
    """Collection flags, notation or singular names are inconsistent."""


class MergeConflictError(DtoConfigError):
    """The same field is declared with different types in two files."""


class InheritanceError(DtoConfigError):
    """An ``extends`` target is missing or has the wrong mutability."""


class CycleError(DtoConfigError):
    """The DTO dependency graph contains a cycle.

    Attributes:
        path: The cycle, starting and ending with the same DTO name
    """

    def __init__(self, message: str, *, path: list[str], hint: str | None = None):
        self.path = path
        super().__init__(message, dto_name=path[0] if path else None, hint=hint)


class MethodCollisionError(DtoConfigError):
    """Two fields would generate the same accessor methods."""


class EngineError(ValueError):
    """A config file cannot be found, read or parsed."""

