"""
FastAPI router for the car inventory.

Mounted under /tt/v0. Successful responses are `application/vnd.api+json`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from . import schemas, service
from .dependencies import get_car_id, get_store
from .repository import CarStore

API_PREFIX = "/tt/v0"


class VndApiJSONResponse(JSONResponse):
    media_type = "application/vnd.api+json"


router = APIRouter(prefix=API_PREFIX, default_response_class=VndApiJSONResponse)


@router.get("/cars", status_code=status.HTTP_200_OK)
async def list_cars(store: CarStore = Depends(get_store)) -> list[schemas.CarModel]:
    return await service.list_cars(store)


@router.get("/cars/{car_id}", status_code=status.HTTP_200_OK)
async def get_car(
    car_id: int = Depends(get_car_id),
    store: CarStore = Depends(get_store),
) -> schemas.CarModel:
    return await service.get_car(store, car_id)


@router.post("/cars", status_code=status.HTTP_202_ACCEPTED)
async def create_car(
    payload: schemas.CarPayload,
    store: CarStore = Depends(get_store),
) -> schemas.CarModel:
    return await service.create_car(store, payload)


@router.put("/cars/{car_id}", status_code=status.HTTP_202_ACCEPTED)
async def update_car(
    payload: schemas.CarPayload,
    car_id: int = Depends(get_car_id),
    store: CarStore = Depends(get_store),
) -> schemas.CarModel:
    """
    Replace brand, model, price, status and mileage of an existing car.
    """
    return await service.update_car(store, car_id, payload)


@router.delete(
    "/cars/{car_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_car(
    car_id: int = Depends(get_car_id),
    store: CarStore = Depends(get_store),
) -> Response:
    await service.delete_car(store, car_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
