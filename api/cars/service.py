"""
Car business logic.

Scope:
- identifier checks before writes (present / absent / matching the path)
- existence checks before updates
- merge of non-null fields for partial updates

Concurrent writes to the same car are not serialized; the last write wins.
"""

from __future__ import annotations

import asyncio

from fastapi import HTTPException, status

from core.errors import BadRequestAlertError, NotFoundAlertError
from core.pagination import PageRequest

from . import repository, schemas
from .entity import Car

ENTITY_NAME = "carCar"


def _check_identifier(car_id: int, body: schemas.CarBody) -> None:
    if body.id is None:
        raise BadRequestAlertError("Invalid id", entity_name=ENTITY_NAME, error_key="idnull")
    if body.id != car_id:
        raise BadRequestAlertError("Invalid ID", entity_name=ENTITY_NAME, error_key="idinvalid")


async def _ensure_exists(car_id: int) -> None:
    if not await repository.exists_by_id(car_id):
        raise NotFoundAlertError("Entity not found", entity_name=ENTITY_NAME, error_key="idnotfound")


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND)


async def create_car(body: schemas.CarBody) -> Car:
    if body.id is not None:
        raise BadRequestAlertError(
            "A new car cannot already have an ID",
            entity_name=ENTITY_NAME,
            error_key="idexists",
        )
    saved = await repository.save(body.to_entity())
    if saved is None:
        raise RuntimeError("Failed to save car.")
    return saved


async def update_car(car_id: int, body: schemas.CarBody) -> Car:
    _check_identifier(car_id, body)
    await _ensure_exists(car_id)

    saved = await repository.save(body.to_entity())
    if saved is None:
        # Deleted between the existence check and the write.
        raise _not_found()
    return saved


async def partial_update_car(car_id: int, body: schemas.CarBody) -> Car:
    _check_identifier(car_id, body)
    await _ensure_exists(car_id)

    existing = await repository.find_by_id(car_id)
    if existing is None:
        raise _not_found()

    changes = body.model_dump(exclude_none=True, exclude={"id"})
    for field_name, value in changes.items():
        setattr(existing, field_name, value)

    saved = await repository.save(existing)
    if saved is None:
        raise _not_found()
    return saved


async def list_cars(page_request: PageRequest) -> tuple[list[Car], int]:
    """
    Return one page of cars and the size of the whole collection.
    """
    total, cars = await asyncio.gather(
        repository.count(),
        repository.find_all_by(page_request),
    )
    return cars, total


async def get_car(car_id: int) -> Car:
    car = await repository.find_by_id(car_id)
    if car is None:
        raise _not_found()
    return car


async def delete_car(car_id: int) -> None:
    await repository.delete_by_id(car_id)
