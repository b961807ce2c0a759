from __future__ import annotations

from datetime import datetime

import pytest

from src.intern_tracker.intern_tracker.core.enums import Role
from src.intern_tracker.intern_tracker.main import create_app


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 10, 9, 5, 0)


class SteppingClock:
    """Callable clock the app reads "now" from; tests move it by hand."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def set(self, hhmm: str) -> None:
        hours, minutes = (int(p) for p in hhmm.split(":"))
        self.now = self.now.replace(hour=hours, minute=minutes, second=0)


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock(datetime(2025, 3, 10, 8, 0, 0))


@pytest.fixture
def app(tmp_path, clock):
    app = create_app(
        {
            "SECRET_KEY": "test-secret",
            "TESTING": True,
            "DEBUG": False,
            "STORE_BACKEND": "file",
            "DATA_FILE": str(tmp_path / "store.json"),
            "AUTO_INIT_DB": False,
            "AUTO_SEED_DB": False,
            "LOG_LEVEL": "WARNING",
            "CLOCK": clock,
        }
    )
    return app


@pytest.fixture
def container(app):
    return app.extensions["intern_tracker"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def intern_client(app):
    client = app.test_client()
    resp = client.post(
        "/api/auth/register",
        json={"name": "Ada Intern", "email": "ada@example.com", "password": "secret1", "department": "R&D"},
    )
    assert resp.status_code == 201
    return client


@pytest.fixture
def admin_client(app, container):
    container.auth_service.register(
        name="Grace Admin",
        email="admin@example.com",
        password="admin123",
        role=Role.ADMIN,
    )
    client = app.test_client()
    resp = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "admin123"})
    assert resp.status_code == 200
    return client
