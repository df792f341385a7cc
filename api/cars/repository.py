"""
Car persistence (raw SQL).

The surface mirrors a generated CRUD repository: save, find_by_id,
exists_by_id, delete_by_id, count and find_all_by (paged).
"""

from __future__ import annotations

from core import db
from core.pagination import PageRequest

from .entity import Car

# Public property name -> column, used for `sort` resolution.
SORTABLE_COLUMNS: dict[str, str] = {
    "id": "id",
    "name": "name",
    "age": "age",
    "isBroken": "is_broken",
}

_SELECT_COLUMNS = "id, name, age, is_broken"

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS car (
    id BIGSERIAL PRIMARY KEY,
    name VARCHAR(255),
    age NUMERIC(21, 2),
    is_broken BOOLEAN
)
"""


async def ensure_schema() -> None:
    await db.execute(CREATE_TABLE_SQL)


async def _insert(car: Car) -> Car:
    row = await db.fetch_one(
        f"""
        INSERT INTO car (name, age, is_broken)
        VALUES ($1, $2, $3)
        RETURNING {_SELECT_COLUMNS}
        """,
        car.name,
        car.age,
        car.is_broken,
    )
    if row is None:
        raise RuntimeError("Failed to insert car.")
    return Car.from_row(row)


async def _update(car: Car) -> Car | None:
    row = await db.fetch_one(
        f"""
        UPDATE car
        SET name = $2,
            age = $3,
            is_broken = $4
        WHERE id = $1
        RETURNING {_SELECT_COLUMNS}
        """,
        car.id,
        car.name,
        car.age,
        car.is_broken,
    )
    return Car.from_row(row) if row is not None else None


async def save(car: Car) -> Car | None:
    """
    Insert a car without id, or overwrite every column of a car with one.

    Returns the stored car; None when updating an id that no longer exists.
    """
    if car.id is None:
        return await _insert(car)
    return await _update(car)


async def find_by_id(car_id: int) -> Car | None:
    row = await db.fetch_one(
        f"""
        SELECT {_SELECT_COLUMNS}
        FROM car
        WHERE id = $1
        """,
        car_id,
    )
    return Car.from_row(row) if row is not None else None


async def exists_by_id(car_id: int) -> bool:
    found = await db.fetch_val(
        "SELECT EXISTS (SELECT 1 FROM car WHERE id = $1)",
        car_id,
    )
    return bool(found)


async def delete_by_id(car_id: int) -> None:
    await db.execute("DELETE FROM car WHERE id = $1", car_id)


async def count() -> int:
    total = await db.fetch_val("SELECT count(*) FROM car")
    return int(total or 0)


def _order_by(page_request: PageRequest) -> str:
    # Columns come from SORTABLE_COLUMNS only, never from the client.
    allowed = set(SORTABLE_COLUMNS.values())
    orders = [
        f"{column} {direction}"
        for column, direction in page_request.sort
        if column in allowed and direction in ("ASC", "DESC")
    ]
    # Stable paging needs a unique tiebreaker.
    if not any(order.startswith("id ") for order in orders):
        orders.append("id ASC")
    return ", ".join(orders)


async def find_all_by(page_request: PageRequest) -> list[Car]:
    rows = await db.fetch_all(
        f"""
        SELECT {_SELECT_COLUMNS}
        FROM car
        ORDER BY {_order_by(page_request)}
        LIMIT $1
        OFFSET $2
        """,
        page_request.size,
        page_request.offset,
    )
    return [Car.from_row(row) for row in rows]
