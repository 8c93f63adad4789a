"""Tests for settings, store selection and the CLI parser."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from cars import build_store
from cars.memory import InMemoryCarStore
from core import settings
from main import app, build_parser


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("CARS_STORE", "CARS_STORE_TIMEOUT_S", "CARS_INIT_SCHEMA", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        assert settings.store_backend() == "postgres"
        assert settings.store_timeout_s() == 15.0
        assert settings.init_schema() is True
        assert settings.legacy_error_status() is False
        assert settings.log_level() == "INFO"

    def test_bad_numbers_fall_back(self, monkeypatch):
        monkeypatch.setenv("CARS_STORE_TIMEOUT_S", "soon")
        assert settings.store_timeout_s() == 15.0

    @pytest.mark.parametrize(("raw", "want"), [("YES", True), ("0", False), ("maybe", True)])
    def test_bool(self, monkeypatch, raw, want):
        monkeypatch.setenv("CARS_INIT_SCHEMA", raw)
        assert settings.init_schema() is want


class TestBuildStore:
    def test_memory(self):
        assert isinstance(asyncio.run(build_store()), InMemoryCarStore)

    def test_unknown_backend(self, monkeypatch):
        monkeypatch.setenv("CARS_STORE", "sqlite")
        with pytest.raises(RuntimeError):
            asyncio.run(build_store())

    def test_postgres_without_url_fails_startup(self, monkeypatch):
        monkeypatch.setenv("CARS_STORE", "postgres")
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(RuntimeError):
            with TestClient(app):
                pass


def test_lifespan_sets_and_clears_store():
    with TestClient(app) as client:
        assert isinstance(client.app.state.store, InMemoryCarStore)
    assert app.state.store is None


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.port == 8000
    assert args.conn is None
    assert args.store is None


def test_parser_flags():
    args = build_parser().parse_args(["--conn", "postgres://db/cars", "--port", "9000", "--store", "memory"])
    assert args.conn == "postgres://db/cars"
    assert args.port == 9000
    assert args.store == "memory"
