"""Tests for the in-memory car store."""

import asyncio

import pytest

from cars.errors import BadMileageError, BadPriceError, CarNotFoundError
from cars.memory import InMemoryCarStore
from cars.schemas import CarStatus


def _create(store, **overrides):
    fields = {
        "brand": "Lada",
        "model": "Niva",
        "price": 500000,
        "status": CarStatus.IN_STOCK,
        "mileage": 42,
    }
    fields.update(overrides)
    return asyncio.run(store.create_car(**fields))


class TestCreate:
    def test_returns_input_with_fresh_id(self):
        store = InMemoryCarStore()
        first = _create(store)
        second = _create(store, brand="UAZ")

        assert first.id != second.id
        assert (first.brand, first.model, first.price, first.status, first.mileage) == (
            "Lada",
            "Niva",
            500000,
            CarStatus.IN_STOCK,
            42,
        )

    def test_negative_price_persists_nothing(self):
        store = InMemoryCarStore()
        with pytest.raises(BadPriceError):
            _create(store, price=-1)
        assert asyncio.run(store.list_cars()) == []

    def test_negative_mileage_persists_nothing(self):
        store = InMemoryCarStore()
        with pytest.raises(BadMileageError):
            _create(store, mileage=-1)
        assert asyncio.run(store.list_cars()) == []

    def test_price_checked_before_mileage(self):
        store = InMemoryCarStore()
        with pytest.raises(BadPriceError):
            _create(store, price=-1, mileage=-1)


class TestReadUpdateDelete:
    def test_get_returns_last_written_state(self):
        store = InMemoryCarStore()
        car = _create(store)
        assert asyncio.run(store.get_car(car.id)) == car

        updated = asyncio.run(
            store.update_car(
                car.id,
                brand="BMW",
                model="X5",
                price=1,
                status=CarStatus.SOLD,
                mileage=2,
            )
        )
        assert updated.id == car.id
        assert asyncio.run(store.get_car(car.id)) == updated

    def test_update_missing_does_not_create(self):
        store = InMemoryCarStore()
        with pytest.raises(CarNotFoundError):
            asyncio.run(
                store.update_car(
                    404,
                    brand="BMW",
                    model="X5",
                    price=1,
                    status=CarStatus.SOLD,
                    mileage=2,
                )
            )
        assert asyncio.run(store.list_cars()) == []

    def test_update_validates_before_lookup(self):
        store = InMemoryCarStore()
        car = _create(store)
        with pytest.raises(BadMileageError):
            asyncio.run(
                store.update_car(
                    car.id,
                    brand="BMW",
                    model="X5",
                    price=1,
                    status=CarStatus.SOLD,
                    mileage=-5,
                )
            )
        assert asyncio.run(store.get_car(car.id)) == car

    def test_delete_then_get_is_not_found(self):
        store = InMemoryCarStore()
        car = _create(store)
        asyncio.run(store.delete_car(car.id))

        with pytest.raises(CarNotFoundError):
            asyncio.run(store.get_car(car.id))
        with pytest.raises(CarNotFoundError):
            asyncio.run(store.delete_car(car.id))

    def test_ids_are_not_reused(self):
        store = InMemoryCarStore()
        car = _create(store)
        asyncio.run(store.delete_car(car.id))
        assert _create(store).id != car.id

    def test_list_after_creates_and_deletes(self):
        store = InMemoryCarStore()
        cars = [_create(store, price=i) for i in range(10)]
        for car in cars[:4]:
            asyncio.run(store.delete_car(car.id))

        remaining = asyncio.run(store.list_cars())
        assert len(remaining) == 6
        assert {car.id for car in remaining} == {car.id for car in cars[4:]}

    def test_returned_records_are_copies(self):
        store = InMemoryCarStore()
        car = _create(store)
        car.brand = "changed"
        assert asyncio.run(store.get_car(car.id)).brand == "Lada"
