from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from unitycure.bootstrap import bootstrap
from unitycure.config import Settings, get_settings
from unitycure.exceptions import StoreUnavailableException
from unitycure.main import app
from unitycure.store import initializer


class UnreachablePrimary:
    @classmethod
    async def from_settings(cls, settings):
        raise ConnectionRefusedError("Can't connect to MySQL server")


class BrokenFallback:
    @classmethod
    async def from_settings(cls, settings):
        raise PermissionError("read-only filesystem")


@pytest.fixture
def env(tmp_path, monkeypatch):
    monkeypatch.setenv("FALLBACK_DB_PATH", str(tmp_path / "fallback.db"))
    monkeypatch.setenv("LEGACY_DB_PATH", str(tmp_path / "no-legacy.db"))
    monkeypatch.setattr(initializer, "PRIMARY_STORE", UnreachablePrimary)
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


def test_health_reports_fallback_store(env):
    with TestClient(app) as client:
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "unitycure", "store": "sqlite"}
    assert (env / "fallback.db").exists()


def test_bootstrap_migrates_then_seeds(tmp_path, monkeypatch, make_legacy_db, legacy_rows):
    monkeypatch.setattr(initializer, "PRIMARY_STORE", UnreachablePrimary)
    legacy = make_legacy_db({"users": legacy_rows["users"]})
    settings = Settings(fallback_db_path=str(tmp_path / "fallback.db"), legacy_db_path=str(legacy))

    async def scenario():
        store = await bootstrap(settings)
        try:
            c = store.collections
            return await c.users.count(), await c.hospitals.count()
        finally:
            await store.dispose()

    # Users came from the legacy store, so only hospitals get seeded
    assert asyncio.run(scenario()) == (2, 3)


def test_bootstrap_raises_when_no_store_opens(monkeypatch):
    monkeypatch.setattr(initializer, "PRIMARY_STORE", UnreachablePrimary)
    monkeypatch.setattr(initializer, "FALLBACK_STORE", BrokenFallback)

    with pytest.raises(StoreUnavailableException):
        asyncio.run(bootstrap(Settings()))
