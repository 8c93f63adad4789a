"""
Car store contract and its Postgres adapter (raw SQL).

`CarStore` is the only thing the service layer talks to. It carries no
asyncpg types, so `cars.memory.InMemoryCarStore` satisfies it as well.

Every data method takes a keyword-only `timeout` (seconds) that bounds the
statement itself. The service layer bounds the whole call, pool acquire and
lock waits included, with `asyncio.wait_for`. Cancelling the awaiting task
aborts the call.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Protocol

import asyncpg

from core import db

from .errors import BadMileageError, BadPriceError, CarNotFoundError, StorageFailureError
from .schemas import CarModel, CarStatus

logger = logging.getLogger(__name__)

CAR_COLUMNS = "id, brand, model, price, status, mileage"

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS carmodel (
    id BIGSERIAL PRIMARY KEY,
    brand TEXT NOT NULL DEFAULT '',
    model TEXT NOT NULL DEFAULT '',
    price BIGINT NOT NULL CHECK (price >= 0),
    status TEXT NOT NULL,
    mileage BIGINT NOT NULL CHECK (mileage >= 0)
)
"""


class CarStore(Protocol):
    async def list_cars(self, *, timeout: float | None = None) -> list[CarModel]: ...

    async def get_car(self, car_id: int, *, timeout: float | None = None) -> CarModel: ...

    async def create_car(
        self,
        *,
        brand: str,
        model: str,
        price: int,
        status: CarStatus,
        mileage: int,
        timeout: float | None = None,
    ) -> CarModel: ...

    async def update_car(
        self,
        car_id: int,
        *,
        brand: str,
        model: str,
        price: int,
        status: CarStatus,
        mileage: int,
        timeout: float | None = None,
    ) -> CarModel: ...

    async def delete_car(self, car_id: int, *, timeout: float | None = None) -> None: ...

    async def close(self) -> None: ...


def validate_car_numbers(price: int, mileage: int) -> None:
    """
    Reject negative price/mileage. Price is checked first.
    """
    if price < 0:
        raise BadPriceError()
    if mileage < 0:
        raise BadMileageError()


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except asyncio.TimeoutError as exc:
        raise StorageFailureError(f"{operation}: storage deadline exceeded") from exc
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
        raise StorageFailureError(f"{operation}: {exc}") from exc


def _to_car(row: dict[str, Any]) -> CarModel:
    try:
        return CarModel.from_row(row)
    except (KeyError, TypeError, ValueError) as exc:
        raise StorageFailureError(f"Stored car {row.get('id')!r} is unreadable: {exc}") from exc


class PostgresCarStore:
    """
    Car store backed by the shared asyncpg pool in `core.db`.

    Update and delete are single conditional statements; a missing row shows up
    as an empty RETURNING set rather than a separate existence check.
    """

    def __init__(self) -> None:
        self._closed = False

    @classmethod
    async def connect(cls, dsn: str | None = None, *, init_schema: bool = True) -> PostgresCarStore:
        await db.init_pool(dsn)
        store = cls()
        if init_schema:
            await store.ensure_schema()
        return store

    async def ensure_schema(self) -> None:
        with _storage_errors("ensure schema"):
            await db.execute(SCHEMA_SQL)
        logger.info("Table carmodel is ready.")

    async def list_cars(self, *, timeout: float | None = None) -> list[CarModel]:
        with _storage_errors("list cars"):
            rows = await db.fetch_all(
                f"""
                SELECT {CAR_COLUMNS}
                FROM carmodel
                """,
                timeout=timeout,
            )
        return [_to_car(row) for row in rows]

    async def get_car(self, car_id: int, *, timeout: float | None = None) -> CarModel:
        with _storage_errors("get car"):
            row = await db.fetch_one(
                f"""
                SELECT {CAR_COLUMNS}
                FROM carmodel
                WHERE id = $1
                """,
                car_id,
                timeout=timeout,
            )
        if row is None:
            raise CarNotFoundError()
        return _to_car(row)

    async def create_car(
        self,
        *,
        brand: str,
        model: str,
        price: int,
        status: CarStatus,
        mileage: int,
        timeout: float | None = None,
    ) -> CarModel:
        validate_car_numbers(price, mileage)

        with _storage_errors("create car"):
            row = await db.fetch_one(
                f"""
                INSERT INTO carmodel (brand, model, price, status, mileage)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {CAR_COLUMNS}
                """,
                brand,
                model,
                price,
                status.label,
                mileage,
                timeout=timeout,
            )
        if row is None:
            raise StorageFailureError("Failed to create car.")
        car = _to_car(row)
        logger.debug("Created car id=%s", car.id)
        return car

    async def update_car(
        self,
        car_id: int,
        *,
        brand: str,
        model: str,
        price: int,
        status: CarStatus,
        mileage: int,
        timeout: float | None = None,
    ) -> CarModel:
        validate_car_numbers(price, mileage)

        with _storage_errors("update car"):
            row = await db.fetch_one(
                f"""
                UPDATE carmodel
                SET brand = $1,
                    model = $2,
                    price = $3,
                    status = $4,
                    mileage = $5
                WHERE id = $6
                RETURNING {CAR_COLUMNS}
                """,
                brand,
                model,
                price,
                status.label,
                mileage,
                car_id,
                timeout=timeout,
            )
        if row is None:
            raise CarNotFoundError()
        logger.debug("Updated car id=%s", car_id)
        return _to_car(row)

    async def delete_car(self, car_id: int, *, timeout: float | None = None) -> None:
        with _storage_errors("delete car"):
            row = await db.fetch_one(
                """
                DELETE FROM carmodel
                WHERE id = $1
                RETURNING id
                """,
                car_id,
                timeout=timeout,
            )
        if row is None:
            raise CarNotFoundError()
        logger.debug("Deleted car id=%s", car_id)

    async def close(self) -> None:
        if self._closed:
            return None
        self._closed = True
        await db.close_pool()
