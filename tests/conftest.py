# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from task_api.core.config import Settings
from task_api.db.session import create_db_and_tables, create_db_engine
from task_api.main import create_app

from .helpers import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Per-test settings on a fresh SQLite file (its directory does not exist yet)."""
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'data' / 'tasks.db'}",
        SECRET_KEY="test-secret",
        JWT_EXPIRES_IN="1h",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def app(settings: Settings, clock: FakeClock):
    return create_app(settings, clock=clock)


@pytest.fixture()
def client(app) -> Iterator[TestClient]:
    # Entering the context runs the lifespan, which creates the tables
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def session(settings: Settings) -> Iterator[Session]:
    engine = create_db_engine(settings.DATABASE_URL)
    create_db_and_tables(engine)
    with Session(engine) as db_session:
        yield db_session
    engine.dispose()
