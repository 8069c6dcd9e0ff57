import pytest
from fastapi.testclient import TestClient

import app.main as main_module
from app.core.config import Settings
from app.db.memory import MemoryStorage


class TrackingStorage(MemoryStorage):
    closed = False

    async def close(self) -> None:
        self.closed = True


def test_storage_closed_when_seeding_fails(monkeypatch):
    storage = TrackingStorage()

    async def failing_seed(ledger):
        raise RuntimeError("seed failed")

    monkeypatch.setattr(main_module, "build_storage", lambda settings: storage)
    monkeypatch.setattr(main_module, "seed_sample_data", failing_seed)
    settings = Settings(STORAGE_BACKEND="memory", SEED_SAMPLE_DATA=True, LOG_LEVEL="WARNING")

    with pytest.raises(RuntimeError, match="seed failed"):
        with TestClient(main_module.create_app(settings)):
            pass

    assert storage.closed is True
