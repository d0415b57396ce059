"""Classes used as `it` in tests."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar


class Status(Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass
class Address:
    street: str
    city: str
    zip_code: int

    def format(self, separator: str) -> str:
        return separator.join((self.street, self.city))


class Catalog:
    def __getitem__(self, sku: str) -> "Order":
        raise KeyError(sku)


@dataclass
class Order:
    id: int
    name: str
    total: Decimal
    price: float
    tags: list[str]
    address: Address
    lines: dict[str, Address]
    status: Status
    created: datetime
    catalog: Catalog
    note: str | None = None
    payload: Any = None
    history: list[Address] = field(default_factory=list)

    MAX_ITEMS: ClassVar[int] = 100

    @property
    def label(self) -> str:
        return f"{self.id}: {self.name}"

    def scale(self, factor: float, offset: float = 0.0) -> float:
        return self.price * factor + offset

    @staticmethod
    def parse(text: str) -> "Order":
        raise NotImplementedError(text)


class Untyped:
    def __init__(self) -> None:
        self.value = 1

    def compute(self, x):  # type: ignore[no-untyped-def]
        return x
