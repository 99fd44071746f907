from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from petapp.config import get_settings
from petapp.main import app
from petapp.observability.metrics import reset_metrics
from petapp.services.pet_store import PetStore, set_pet_store


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> PetStore:
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "server.log"))
    monkeypatch.delenv("ENABLE_METRICS_ENDPOINT", raising=False)
    get_settings.cache_clear()

    store = PetStore()
    set_pet_store(store)
    reset_metrics()

    yield store

    set_pet_store(None)
    reset_metrics()
    get_settings.cache_clear()


@pytest.fixture
def store(test_environment: PetStore) -> PetStore:
    return test_environment


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
