"""
Car inventory business logic.

Scope:
- call the car store with the configured per-call deadline
- map store error kinds to HTTP errors
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, TypeVar

from fastapi import HTTPException, status

from core import settings

from . import schemas
from .errors import CarNotFoundError, CarStoreError, CarValidationError, StorageFailureError
from .repository import CarStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _status_code_for(exc: CarStoreError) -> int:
    if settings.legacy_error_status():
        # Old clients expect every store error as a plain 500.
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    if isinstance(exc, CarNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, CarValidationError):
        return 422
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _to_http_error(exc: CarStoreError, *, operation: str) -> HTTPException:
    status_code = _status_code_for(exc)
    if isinstance(exc, StorageFailureError):
        logger.exception("Car store failed during %s.", operation)
    return HTTPException(status_code=status_code, detail=str(exc))


async def _with_deadline(call: Awaitable[T], timeout: float) -> T:
    """
    Bound the whole store call, including waiting for a pool connection or lock.
    """
    try:
        return await asyncio.wait_for(call, timeout)
    except asyncio.TimeoutError as exc:
        raise StorageFailureError(f"storage deadline of {timeout}s exceeded") from exc


async def list_cars(store: CarStore) -> list[schemas.CarModel]:
    timeout = settings.store_timeout_s()
    try:
        return await _with_deadline(store.list_cars(timeout=timeout), timeout)
    except CarStoreError as exc:
        raise _to_http_error(exc, operation="list") from exc


async def get_car(store: CarStore, car_id: int) -> schemas.CarModel:
    timeout = settings.store_timeout_s()
    try:
        return await _with_deadline(store.get_car(car_id, timeout=timeout), timeout)
    except CarStoreError as exc:
        raise _to_http_error(exc, operation="get") from exc


async def create_car(store: CarStore, payload: schemas.CarPayload) -> schemas.CarModel:
    timeout = settings.store_timeout_s()
    try:
        return await _with_deadline(
            store.create_car(
                brand=payload.brand,
                model=payload.model,
                price=payload.price,
                status=payload.status,
                mileage=payload.mileage,
                timeout=timeout,
            ),
            timeout,
        )
    except CarStoreError as exc:
        raise _to_http_error(exc, operation="create") from exc


async def update_car(store: CarStore, car_id: int, payload: schemas.CarPayload) -> schemas.CarModel:
    timeout = settings.store_timeout_s()
    try:
        return await _with_deadline(
            store.update_car(
                car_id,
                brand=payload.brand,
                model=payload.model,
                price=payload.price,
                status=payload.status,
                mileage=payload.mileage,
                timeout=timeout,
            ),
            timeout,
        )
    except CarStoreError as exc:
        raise _to_http_error(exc, operation="update") from exc


async def delete_car(store: CarStore, car_id: int) -> None:
    timeout = settings.store_timeout_s()
    try:
        await _with_deadline(store.delete_car(car_id, timeout=timeout), timeout)
    except CarStoreError as exc:
        raise _to_http_error(exc, operation="delete") from exc
