"""
The Car record.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any


def normalize_decimal(value: Decimal | int | float | str | None) -> Decimal | None:
    """
    Strip trailing fractional zeros so `1.50`, `1.5` and `1.500` compare and
    print the same after a database round-trip (numeric columns pad scale).
    """
    if value is None:
        return None
    if not isinstance(value, Decimal):
        # str() keeps floats from dragging in binary noise.
        value = Decimal(str(value))
    return value.normalize()


class Car:
    """
    A Car.

    Identity is the database id: two cars with the same id are the same
    entity whatever their other fields hold. A car without an id is only
    equal to itself.
    """

    def __init__(
        self,
        *,
        id: int | None = None,
        name: str | None = None,
        age: Decimal | int | float | str | None = None,
        is_broken: bool | None = None,
    ) -> None:
        self.id = id
        self.name = name
        self.age = age
        self.is_broken = is_broken

    @property
    def age(self) -> Decimal | None:
        return self._age

    @age.setter
    def age(self, value: Decimal | int | float | str | None) -> None:
        self._age = normalize_decimal(value)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Car:
        return cls(
            id=row.get("id"),
            name=row.get("name"),
            age=row.get("age"),
            is_broken=row.get("is_broken"),
        )

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Car):
            return NotImplemented
        return self.id is not None and self.id == other.id

    def __hash__(self) -> int:
        # Constant per class: a transient car keeps its bucket once saved.
        return hash(type(self))

    def __repr__(self) -> str:
        return (
            f"Car(id={self.id!r}, name={self.name!r}, "
            f"age={self.age!r}, is_broken={self.is_broken!r})"
        )
