import os
import sys
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
import fakeredis.aioredis as fakeredis

from meetgrid import db, lifespan
from meetgrid.config import clear_settings_cache
from meetgrid.dependencies import require_database
from meetgrid.engine import GridMapper, generate_slots


class _AwaitableRedis:
    def __init__(self, client):
        self._client = client

    def __await__(self):
        async def _coro():
            return self._client

        return _coro().__await__()


class InMemoryEventStore:
    """Stands in for the PostgreSQL event store in API tests."""

    def __init__(self):
        self.events = {}
        self.responses = {}
        self._next_id = 0

    async def create_event(self, name, mode, columns, time_start, time_end, id_length=10):
        self._next_id += 1
        event_id = f"evt{self._next_id:0{max(id_length - 3, 1)}d}"
        event = {
            "id": event_id,
            "name": name,
            "mode": mode,
            "columns": list(columns),
            "time_range": {"start": time_start, "end": time_end},
            "created_at": datetime.now(UTC).isoformat(),
        }
        self.events[event_id] = event
        self.responses[event_id] = {}
        return event

    async def get_event(self, event_id):
        return self.events.get(event_id)

    async def get_responses(self, event_id):
        return {name: dict(a) for name, a in self.responses.get(event_id, {}).items()}

    async def upsert_response(self, event_id, participant_name, availability):
        self.responses[event_id][participant_name] = dict(availability)
        return {
            "event_id": event_id,
            "participant_name": participant_name,
            "availability": availability,
            "updated_at": datetime.now(UTC).isoformat(),
        }


@pytest.fixture
def scenario_grid():
    return GridMapper(["2024-06-03", "2024-06-04"], generate_slots("09:00", "10:00"))


@pytest.fixture
def scenario_responses():
    return {
        "Alice": {"2024-06-03_09:00": True},
        "Bob": {"2024-06-03_09:00": True, "2024-06-03_09:30": True},
    }


@pytest.fixture
def store(monkeypatch):
    fake = InMemoryEventStore()
    monkeypatch.setattr(db, "w2m_create_event", fake.create_event)
    monkeypatch.setattr(db, "w2m_get_event", fake.get_event)
    monkeypatch.setattr(db, "w2m_get_responses", fake.get_responses)
    monkeypatch.setattr(db, "w2m_upsert_response", fake.upsert_response)
    return fake


@pytest.fixture
def client(monkeypatch, store):
    def fake_redis_constructor(*_args, **_kwargs):
        fake = fakeredis.FakeRedis(decode_responses=True)
        return _AwaitableRedis(fake)

    monkeypatch.setenv("ENABLE_DB", "0")
    clear_settings_cache()
    monkeypatch.setattr(lifespan.redis, "Redis", fake_redis_constructor)

    import meetgrid.main as main

    main.app.dependency_overrides[require_database] = lambda: None
    try:
        with TestClient(main.app) as c:
            yield c
    finally:
        main.app.dependency_overrides.clear()
        clear_settings_cache()
