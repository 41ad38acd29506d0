"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from roadtrip.database import Base, get_db
from roadtrip.main import app


class AuthHeaders(dict):
    """Dict subclass that also stores the account behind the token."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/roadtrip", "/roadtrip_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _register(client, username: str, email: str, password: str = "testpass123") -> AuthHeaders:
    response = client.post(
        "/api/auth/signup",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 201
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"}, user_id=data["_id"], email=data["email"]
    )


@pytest.fixture
def register_user(client):
    """Sign up an account and return bearer headers for it."""

    def register(username: str, email: str, password: str = "testpass123") -> AuthHeaders:
        return _register(client, username, email, password)

    return register


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return _register(client, "alice", "alice@example.com")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return _register(client, "bob", "bob@example.com")


@pytest.fixture
def sample_trip():
    """Request body for a two-stop trip."""
    return {
        "title": "European Adventure",
        "description": "Backpacking across Europe",
        "locations": [
            {"name": "Paris", "latitude": 48.8566, "longitude": 2.3522},
            {"name": "Rome", "latitude": 41.9028, "longitude": 12.4964},
        ],
    }
