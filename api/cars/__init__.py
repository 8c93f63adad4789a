"""
Car inventory feature: schemas, store contract and adapters, HTTP routes.
"""

from __future__ import annotations

from core import settings

from .memory import InMemoryCarStore
from .repository import CarStore, PostgresCarStore


async def build_store(dsn: str | None = None) -> CarStore:
    """
    Build the store selected by `CARS_STORE`. Connection errors propagate.
    """
    backend = settings.store_backend()
    if backend == "memory":
        return InMemoryCarStore()
    if backend == "postgres":
        return await PostgresCarStore.connect(dsn, init_schema=settings.init_schema())
    raise RuntimeError(f"Unknown CARS_STORE backend: {backend!r}")
