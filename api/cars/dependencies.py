"""
Dependencies for car routes.
"""

from __future__ import annotations

import re

from fastapi import HTTPException, Request, status

from .repository import CarStore
from .schemas import MAX_INT64

# Ids are BIGSERIAL, so anything past the signed 64-bit range can't exist.
MAX_CAR_ID = MAX_INT64

_DIGITS = re.compile(r"[0-9]+")


def parse_car_id(raw: str) -> int:
    raw = (raw or "").strip()
    if not _DIGITS.fullmatch(raw):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="bad 'id' url argument",
        )
    car_id = int(raw)
    if car_id > MAX_CAR_ID:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="bad 'id' url argument",
        )
    return car_id


async def get_car_id(car_id: str) -> int:
    return parse_car_id(car_id)


async def get_store(request: Request) -> CarStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Car store is not initialized. It is built in the app lifespan.")
    return store
