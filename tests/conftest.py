"""
Task Manager - Test Configuration

Pytest fixtures for authentication and list/task testing.
Provides test settings, database, client, and user fixtures.
"""

import pytest
from typing import Generator

from fastapi.testclient import TestClient
from sqlmodel import Session

from taskmanager.app import create_app
from taskmanager.auth import credentials
from taskmanager.auth.models import User
from taskmanager.config import Settings
from taskmanager.database import get_engine, init_db


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

TEST_EMAIL = "a@b.com"
TEST_PASSWORD = "longenough"


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a signing key and a cheap bcrypt work factor."""
    return Settings(
        DATABASE_URL=TEST_DATABASE_URL,
        SECRET_KEY="test-secret-key",
        BCRYPT_WORK_FACTOR=4,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def test_engine():
    """Create a fresh test database engine for each test."""
    engine = get_engine(TEST_DATABASE_URL)
    init_db(engine)
    
    yield engine
    
    engine.dispose()


@pytest.fixture
def db_session(test_engine) -> Generator[Session, None, None]:
    """Database session for tests that bypass HTTP."""
    with Session(test_engine) as session:
        yield session


@pytest.fixture
def test_user(db_session, test_settings) -> User:
    """A registered user in the standalone test database."""
    return credentials.register(db_session, TEST_EMAIL, TEST_PASSWORD, test_settings)


@pytest.fixture
def client(test_settings) -> Generator[TestClient, None, None]:
    """Test client over an app with its own in-memory database."""
    app = create_app(test_settings)
    
    with TestClient(app) as c:
        yield c


@pytest.fixture
def app_db(client) -> Generator[Session, None, None]:
    """Database session on the client application's engine."""
    session = client.app.state.db_session_factory()
    yield session
    session.close()


def register_user(client: TestClient, email: str = TEST_EMAIL, password: str = TEST_PASSWORD):
    """Helper: POST /users and return the response."""
    return client.post("/users", json={"email": email, "password": password})


def login_user(client: TestClient, email: str = TEST_EMAIL, password: str = TEST_PASSWORD) -> dict:
    """Helper: log in and return user id plus both tokens."""
    response = client.post("/users/login", json={"email": email, "password": password})
    if response.status_code != 200:
        return None
    return {
        "_id": response.json()["_id"],
        "access_token": response.headers["x-access-token"],
        "refresh_token": response.headers["x-refresh-token"],
    }


def access_headers(access_token: str) -> dict:
    """Headers for the access-token gate."""
    return {"x-access-token": access_token}


def session_headers(user_id: str, refresh_token: str) -> dict:
    """Headers for the refresh-session gate."""
    return {"x-refresh-token": refresh_token, "_id": user_id}
