"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import itertools

import pytest
from fastapi.testclient import TestClient

from auth import security
from cars import repository as car_repository
from cars.entity import Car
from core.pagination import PageRequest
from main import app


class InMemoryCarStore:
    """Stands in for the car table; same async surface as cars.repository."""

    _COLUMN_TO_ATTR = {"id": "id", "name": "name", "age": "age", "is_broken": "is_broken"}

    def __init__(self) -> None:
        self.rows: dict[int, Car] = {}
        self._ids = itertools.count(1001)

    @staticmethod
    def _copy(car: Car) -> Car:
        return Car(id=car.id, name=car.name, age=car.age, is_broken=car.is_broken)

    async def save(self, car: Car) -> Car | None:
        stored = self._copy(car)
        if stored.id is None:
            stored.id = next(self._ids)
        elif stored.id not in self.rows:
            return None
        self.rows[stored.id] = stored
        return self._copy(stored)

    async def find_by_id(self, car_id: int) -> Car | None:
        car = self.rows.get(car_id)
        return self._copy(car) if car is not None else None

    async def exists_by_id(self, car_id: int) -> bool:
        return car_id in self.rows

    async def delete_by_id(self, car_id: int) -> None:
        self.rows.pop(car_id, None)

    async def count(self) -> int:
        return len(self.rows)

    async def find_all_by(self, page_request: PageRequest) -> list[Car]:
        cars = sorted(self.rows.values(), key=lambda c: c.id)
        for column, direction in reversed(page_request.sort):
            attr = self._COLUMN_TO_ATTR[column]
            cars.sort(
                key=lambda c: (getattr(c, attr) is None, getattr(c, attr)),
                reverse=direction == "DESC",
            )
        page = cars[page_request.offset : page_request.offset + page_request.size]
        return [self._copy(c) for c in page]

    def insert(self, car: Car) -> Car:
        """Synchronous helper for arranging test data."""
        car.id = next(self._ids)
        self.rows[car.id] = self._copy(car)
        return car


@pytest.fixture
def car_store(monkeypatch) -> InMemoryCarStore:
    """Swap the SQL repository for an in-memory store."""
    store = InMemoryCarStore()
    for name in ("save", "find_by_id", "exists_by_id", "delete_by_id", "count", "find_all_by"):
        monkeypatch.setattr(car_repository, name, getattr(store, name))
    return store


@pytest.fixture
def client(car_store):
    """
    FastAPI TestClient. The lifespan is not entered, so no database pool
    is opened.
    """
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    token = security.build_access_token(login="user", authorities=["ROLE_USER"])
    return {"Authorization": f"Bearer {token}"}

