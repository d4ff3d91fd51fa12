"""Pytest configuration and fixtures shared by all packages"""
import os
import tempfile

# Must run before tfidf_store reads its settings
_TEST_DIR = tempfile.mkdtemp(prefix="tfidf-tests-")
if not os.getenv("DATABASE_URL"):
    os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'default.db')}"
os.environ["TFIDF_CREATE_SCHEMA"] = "false"

import pytest
from sqlalchemy.pool import NullPool


@pytest.fixture
def database_url(tmp_path):
    """Plain URL of a fresh SQLite file for this test"""
    return f"sqlite:///{tmp_path / 'tfidf.db'}"


@pytest.fixture
async def engine(database_url):
    """Async engine with the schema created"""
    from tfidf_store.database import build_async_engine, init_db

    engine = build_async_engine(database_url, poolclass=NullPool)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    from tfidf_store.database import build_session_factory

    return build_session_factory(engine)


@pytest.fixture
async def db_session(session_factory):
    """Create a test database session"""
    async with session_factory() as session:
        yield session
