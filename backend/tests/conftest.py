from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from mgnrega_api.db.database import Base, make_session_factory
from mgnrega_api.main import create_app
from mgnrega_api.models import performance  # noqa: F401
from mgnrega_api.services.cache import TTLCache
from mgnrega_api.services.rate_limiter import FixedWindowRateLimiter


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def engine():
    """Fresh in-memory SQLite database without tables."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    Base.metadata.create_all(bind=engine)
    return make_session_factory(engine)


@pytest.fixture()
def session(session_factory):
    s = session_factory()
    yield s
    s.close()


@pytest.fixture()
def broken_session_factory():
    """Session factory for an unreachable database."""

    def factory():
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("connection refused"))

    return factory


def build_client(session_factory, clock, tmp_path, limit=100):
    app = create_app(
        session_factory=session_factory,
        cache=TTLCache(ttl=3600, clock=clock),
        rate_limiter=FixedWindowRateLimiter(limit=limit, window_seconds=60, clock=clock),
        static_dir=str(tmp_path),
        run_startup=False,
    )
    return TestClient(app)


@pytest.fixture()
def client(session_factory, clock, tmp_path) -> TestClient:
    return build_client(session_factory, clock, tmp_path)


@pytest.fixture()
def broken_client(broken_session_factory, clock, tmp_path) -> TestClient:
    return build_client(broken_session_factory, clock, tmp_path)
