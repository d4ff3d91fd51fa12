"""Pytest fixtures for gateway tests"""
import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

from tfidf_gateway.app import app
from tfidf_store import Base, build_async_engine, build_session_factory, get_db
from tfidf_store import models  # noqa: F401


def _override(engine):
    factory = build_session_factory(engine)

    async def override_get_db():
        async with factory() as session:
            yield session

    return override_get_db


def _serve(database_url):
    engine = build_async_engine(database_url, poolclass=NullPool)
    app.dependency_overrides[get_db] = _override(engine)
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
        asyncio.run(engine.dispose())


@pytest.fixture
def client(database_url):
    """Test client on a fresh SQLite database with the schema created"""
    sync_engine = create_engine(database_url)
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    yield from _serve(database_url)


@pytest.fixture
def broken_client(database_url):
    """Test client on a database without tables"""
    yield from _serve(database_url)
