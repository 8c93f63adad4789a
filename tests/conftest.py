from __future__ import annotations

import random
import string

import pytest
from fastapi.testclient import TestClient

from main import app

CARS_URL = "/tt/v0/cars"


def rand_string(n: int) -> str:
    return "".join(random.choice(string.ascii_letters) for _ in range(n))


@pytest.fixture(autouse=True)
def _car_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARS_STORE", "memory")
    monkeypatch.delenv("CARS_LEGACY_ERROR_STATUS", raising=False)
    monkeypatch.delenv("CARS_STORE_TIMEOUT_S", raising=False)


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_cars(client: TestClient) -> list[dict]:
    """
    25 random cars created through the API.
    """
    statuses = ["on the way", "in stock", "sold", "withdrawn from sale"]
    cars = []
    for i in range(25):
        response = client.post(
            CARS_URL,
            json={
                "brand": rand_string(16),
                "model": rand_string(16),
                "price": random.randint(0, 255) * i * 1000,
                "status": random.choice(statuses),
                "mileage": random.randint(0, 255),
            },
        )
        assert response.status_code == 202, response.text
        cars.append(response.json())
    return cars
