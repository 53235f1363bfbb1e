"""
Runtime support for generated DTO classes.
"""

from __future__ import annotations

from .base import (
    ABSTRACT_DTO,
    ABSTRACT_IMMUTABLE_DTO,
    AbstractDto,
    AbstractImmutableDto,
    FromArrayToArray,
    JsonSerializable,
)

__all__ = [
    "ABSTRACT_DTO",
    "ABSTRACT_IMMUTABLE_DTO",
    "AbstractDto",
    "AbstractImmutableDto",
    "FromArrayToArray",
    "JsonSerializable",
]
