"""
Importable classes referenced from DTO schemas in the tests.

Type strings reach them as ``\\dto_codegen\\tests\\fixtures\\<Name>``.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any

from dto_codegen.dto import AbstractDto, AbstractImmutableDto, FromArrayToArray, JsonSerializable

FIXTURES = "\\dto_codegen\\tests\\fixtures"


class OrderStatus(str, Enum):
    PENDING = "pending"
    SHIPPED = "shipped"


class Priority(IntEnum):
    LOW = 1
    HIGH = 2


class Weight(float, Enum):
    LIGHT = 0.5
    HEAVY = 10.0


class Color(Enum):
    RED = object()
    GREEN = object()


class Money(FromArrayToArray):
    def __init__(self, amount: int, currency: str):
        self.amount = amount
        self.currency = currency

    @classmethod
    def create_from_array(cls, data: dict[str, Any]) -> Money:
        return cls(data["amount"], data["currency"])

    def to_array(self) -> dict[str, Any]:
        return {"amount": self.amount, "currency": self.currency}


class Coordinates(JsonSerializable):
    def __init__(self, lat: float, lng: float):
        self.lat = lat
        self.lng = lng

    def json_serialize(self) -> Any:
        return [self.lat, self.lng]


class Report:
    def to_array(self) -> dict[str, Any]:
        return {}


class Plain:
    pass


class ExternalMutableBase(AbstractDto):
    pass


class ExternalImmutableBase(AbstractImmutableDto):
    pass


class NotADto(Plain):
    pass
