import os
from datetime import datetime, timedelta, timezone
from itertools import count

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")

from partsflow.db.session import build_engine
from partsflow.main import create_app
from partsflow.storage.memory import MemStorage
from partsflow.storage.sql import SqlStorage


class TickingClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime = datetime(2026, 1, 1, 8, 0, tzinfo=timezone.utc)):
        self._start = start
        self._ticks = count()

    def __call__(self) -> datetime:
        return self._start + timedelta(seconds=next(self._ticks))


@pytest.fixture()
def clock():
    return TickingClock()


@pytest.fixture(params=["memory", "sql"])
def storage(request, clock):
    if request.param == "memory":
        yield MemStorage(clock=clock)
        return

    engine = build_engine("sqlite://")
    yield SqlStorage(engine, clock=clock)
    engine.dispose()


@pytest.fixture()
def test_context(storage):
    app = create_app(storage=storage)
    with TestClient(app) as client:
        yield client, storage
