# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.orm import Session

os.environ.setdefault("PYTEST_RUNNING", "true")

from radio_calico.core.settings import Settings
from radio_calico.db.session import Database
from radio_calico.main import create_app
from radio_calico.models import SongRating, User

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide settings pointing at an in-memory database."""
    return Settings(database_url=TEST_DB_URL, app_name="Radio Calico Test")


@pytest.fixture()
def database() -> Iterator[Database]:
    """Fresh in-memory database per test."""
    database = Database(TEST_DB_URL)
    database.create_tables()
    try:
        yield database
    finally:
        database.drop_tables()
        database.dispose()


@pytest.fixture()
def db_session(database: Database) -> Iterator[Session]:
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app(test_settings: Settings, database: Database) -> FastAPI:
    return create_app(test_settings, database=database)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def count_ratings(session: Session, song_id: str | None = None) -> int:
    """Count rating rows, optionally for one song."""
    stmt = select(func.count()).select_from(SongRating)
    if song_id is not None:
        stmt = stmt.where(SongRating.song_id == song_id)
    return session.scalar(stmt) or 0


def count_users(session: Session) -> int:
    return session.scalar(select(func.count()).select_from(User)) or 0
