"""
Process startup: bootstrap before serving, fatal on a broken schema.
"""

from __future__ import annotations

import pytest
import uvicorn
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from mgnrega_api.main import create_app, run
from mgnrega_api.models.performance import District


@pytest.fixture()
def served(monkeypatch) -> list:
    calls: list = []
    monkeypatch.setattr(uvicorn, "run", lambda application, **kwargs: calls.append((application, kwargs)))
    return calls


def _app(engine, session_factory, tmp_path):
    return create_app(engine=engine, session_factory=session_factory, static_dir=str(tmp_path), run_startup=False)


def test_run_bootstraps_then_serves(engine, session_factory, tmp_path, served) -> None:
    application = _app(engine, session_factory, tmp_path)
    run(application)

    assert application.state.bootstrapped is True
    assert len(served) == 1
    assert served[0][0] is application
    with session_factory() as session:
        assert session.scalar(select(func.count()).select_from(District)) == 15


def test_run_exits_with_status_1_on_bootstrap_failure(engine, broken_session_factory, tmp_path, served) -> None:
    application = _app(engine, broken_session_factory, tmp_path)
    with pytest.raises(SystemExit) as excinfo:
        run(application)

    assert excinfo.value.code == 1
    assert served == []


def test_lifespan_refuses_to_start_on_bootstrap_failure(engine, broken_session_factory, tmp_path) -> None:
    application = create_app(
        engine=engine,
        session_factory=broken_session_factory,
        static_dir=str(tmp_path),
        run_startup=True,
    )
    with pytest.raises(Exception, match="Database initialization failed"):
        with TestClient(application):
            pass
