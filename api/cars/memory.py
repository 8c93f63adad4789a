"""
In-process car store.

Satisfies the same contract as `PostgresCarStore`; records live for the
lifetime of the process. Used by the tests and by `CARS_STORE=memory`.
"""

from __future__ import annotations

import asyncio
import itertools
import logging

from .errors import CarNotFoundError
from .repository import validate_car_numbers
from .schemas import CarModel, CarStatus

logger = logging.getLogger(__name__)


class InMemoryCarStore:
    def __init__(self) -> None:
        self._cars: dict[int, CarModel] = {}
        # Ids start at 1 and are never handed out twice.
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    async def list_cars(self, *, timeout: float | None = None) -> list[CarModel]:
        async with self._lock:
            return [car.model_copy() for car in self._cars.values()]

    async def get_car(self, car_id: int, *, timeout: float | None = None) -> CarModel:
        async with self._lock:
            car = self._cars.get(car_id)
            if car is None:
                raise CarNotFoundError()
            return car.model_copy()

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

        async with self._lock:
            car = CarModel(
                id=next(self._ids),
                brand=brand,
                model=model,
                price=price,
                status=status,
                mileage=mileage,
            )
            self._cars[car.id] = car
        logger.debug("Created car id=%s", car.id)
        return car.model_copy()

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

        async with self._lock:
            if car_id not in self._cars:
                raise CarNotFoundError()
            car = CarModel(
                id=car_id,
                brand=brand,
                model=model,
                price=price,
                status=status,
                mileage=mileage,
            )
            self._cars[car_id] = car
        logger.debug("Updated car id=%s", car_id)
        return car.model_copy()

    async def delete_car(self, car_id: int, *, timeout: float | None = None) -> None:
        async with self._lock:
            if self._cars.pop(car_id, None) is None:
                raise CarNotFoundError()
        logger.debug("Deleted car id=%s", car_id)

    async def close(self) -> None:
        return None
