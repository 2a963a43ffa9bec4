"""
Root conftest for test configuration.

Provides an in-memory SQLite database with the test models from
``tests/util/models.py`` and resets the cached settings around every test.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from repository_generator.config import get_settings
from repository_generator.tests.util.models import Base


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(scope="function")
def engine():
    # One shared connection, otherwise every connection gets its own empty database
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session(engine):
    SessionLocal = sessionmaker(autoflush=False, bind=engine)
    with SessionLocal() as session:
        yield session
