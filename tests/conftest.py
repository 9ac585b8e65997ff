"""Shared fixtures: an in-memory SQLite database per test and a few rows."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import init_db
from database.deps import get_db_read, get_db_write
from database.models import Base
from main import app

from factories import make_user


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture
def db(engine, session_factory):
    """Session on a fresh database seeded with the built-in meal catalog."""
    init_db(engine=engine, session_factory=session_factory)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def bare_db(engine, session_factory):
    """Session on a fresh database with tables but no catalog meals."""
    Base.metadata.create_all(bind=engine)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    return make_user(db)


@pytest.fixture
def client(db):
    """TestClient whose read and write sessions both use the test database."""
    def _session():
        yield db

    app.dependency_overrides[get_db_read] = _session
    app.dependency_overrides[get_db_write] = _session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
