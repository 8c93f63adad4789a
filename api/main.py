from __future__ import annotations

import argparse
import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from cars import build_store
from cars import router as cars_router
from core.log import configure_logging

DEFAULT_PORT = 8000
SHUTDOWN_DRAIN_S = 15

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Build the store once per process; a failed connection stops startup.
    app.state.store = await build_store()
    logger.info("Car store ready: %s", type(app.state.store).__name__)
    try:
        yield
    finally:
        await app.state.store.close()
        app.state.store = None
        logger.info("Car store closed.")


app = FastAPI(title="Car inventory API", lifespan=lifespan)

app.include_router(cars_router.router, tags=["cars"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Car inventory HTTP service")
    parser.add_argument(
        "--conn",
        default=None,
        help="Connection string for PostgreSQL DB (defaults to $DATABASE_URL)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=DEFAULT_PORT,
        help="Port for HTTP server",
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Interface to bind",
    )
    parser.add_argument(
        "--store",
        choices=["postgres", "memory"],
        default=None,
        help="Car store backend (defaults to $CARS_STORE or postgres)",
    )
    return parser


def run(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    if args.conn:
        os.environ["DATABASE_URL"] = args.conn
    if args.store:
        os.environ["CARS_STORE"] = args.store

    configure_logging()
    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_config=None,
        timeout_graceful_shutdown=SHUTDOWN_DRAIN_S,
    )
    logger.info("HTTP server is shutting down")


if __name__ == "__main__":
    run()
