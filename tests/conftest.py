"""Shared fixtures: an in-memory store with a controllable clock, and an API client wired to it."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from origins_api.main import app
from origins_api.models.schemas import Registration
from origins_api.storage import MemoryStorage
from origins_api.store import RegistrationStore, get_store

START = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


class StepClock:
    """Returns START, then one minute later on every call."""

    def __init__(self, start: datetime = START, step: timedelta = timedelta(minutes=1)) -> None:
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + self.step
        return now


def make_registration(country: str, name: str = "Anonymous", minute: int = 0, id: int | None = None) -> Registration:
    moment = START + timedelta(minutes=minute)
    return Registration(
        id=id if id is not None else int(moment.timestamp() * 1000),
        country=country,
        name=name,
        timestamp=moment.isoformat().replace("+00:00", "Z"),
    )


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage) -> RegistrationStore:
    return RegistrationStore(storage, key="africaMapData", clock=StepClock())


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
