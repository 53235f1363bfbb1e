"""
Emission backends.

Contains the generators consuming a resolved schema set.
"""

from __future__ import annotations

from .base import DtoBackend
from .json_schema_backend import JsonSchemaBackend
from .typescript_backend import TypeScriptBackend

__all__ = [
    "DtoBackend",
    "JsonSchemaBackend",
    "TypeScriptBackend",
]
