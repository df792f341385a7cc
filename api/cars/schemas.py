"""
Pydantic schemas for the car endpoints.

JSON uses camelCase (`isBroken`); Python attributes use snake_case.
Bodies are parsed and written through `core.jsonio` so `age` keeps every
digit (see `core/jsonio.py`).
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from core.db import BIGINT_MAX, BIGINT_MIN

from .entity import Car

# age is stored as numeric(21, 2).
AGE_MAX_DIGITS = 21
AGE_DECIMAL_PLACES = 2


class CarBody(BaseModel):
    """
    Request and response body for a car.

    All fields are optional: `id` is absent on create, and a partial
    update only carries the fields it changes.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = Field(default=None, ge=BIGINT_MIN, le=BIGINT_MAX)
    name: str | None = None
    age: Decimal | None = Field(
        default=None,
        max_digits=AGE_MAX_DIGITS,
        decimal_places=AGE_DECIMAL_PLACES,
        allow_inf_nan=False,
    )
    is_broken: bool | None = Field(default=None, alias="isBroken")

    @classmethod
    def from_entity(cls, car: Car) -> CarBody:
        return cls(id=car.id, name=car.name, age=car.age, is_broken=car.is_broken)

    def to_entity(self) -> Car:
        return Car(id=self.id, name=self.name, age=self.age, is_broken=self.is_broken)

    def to_json_dict(self) -> dict:
        """
        camelCase dict with `age` left as a Decimal, for `ExactJSONResponse`.
        """
        return self.model_dump(by_alias=True)
