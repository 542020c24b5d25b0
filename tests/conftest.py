"""Pytest configuration and fixtures."""
import os

# Set test environment variables before importing app modules
os.environ["SECRET_KEY"] = "test-secret-key-for-testing"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database.connection import Base, get_db
from app.models import blacklist, driver, user  # noqa: F401
from main import app


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """TestClient wired to the per-test in-memory database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def user_payload():
    return {
        "fullname": {"firstname": "John", "lastname": "Doe"},
        "email": "john@example.com",
        "password": "secret123",
    }


@pytest.fixture
def driver_payload():
    return {
        "fullname": {"firstname": "Jane", "lastname": "Roe"},
        "email": "jane@example.com",
        "password": "secret123",
        "vehicle": {
            "color": "black",
            "plate": "abc-1234",
            "capacity": 4,
            "vehicle_type": "car",
        },
    }
