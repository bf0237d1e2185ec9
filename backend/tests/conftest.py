"""Pytest configuration and shared fixtures."""

import os

# Point the app at a throwaway database before any lookin module reads settings
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_lookin.db")
os.environ.setdefault("EMAIL_CONFIRMATION_REQUIRED", "false")
os.environ.setdefault("UPLOAD_DIR", "./test_uploads")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from lookin.main import app
from lookin.config import get_settings
from lookin.database import Base, engine as app_engine, get_db


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")


@pytest.fixture(scope="session")
def engine():
    """Create the test database schema once per run."""
    Base.metadata.create_all(bind=app_engine)
    yield app_engine
    Base.metadata.drop_all(bind=app_engine)


@pytest.fixture(scope="function")
def db_session(engine):
    """Database session whose changes are rolled back after the test."""
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=connection)
    session = SessionLocal()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database session override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def register(client):
    """Factory registering a confirmed user and returning its token and headers."""
    def _register(email: str, full_name: str = None, password: str = "pass123"):
        response = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "full_name": full_name}
        )
        assert response.status_code == 201, response.text
        data = response.json()
        return {
            "id": data["user"]["id"],
            "email": data["user"]["email"],
            "token": data["access_token"],
            "headers": {"Authorization": f"Bearer {data['access_token']}"},
        }
    return _register


@pytest.fixture
def alice(register):
    return register("alice@example.com", "Alice")


@pytest.fixture
def bob(register):
    return register("bob@example.com", "Bob")


@pytest.fixture
def carol(register):
    return register("carol@example.com", "Carol")


@pytest.fixture
def save_profile(client):
    """Factory creating or updating a user's profile."""
    def _save(user: dict, **fields):
        response = client.put("/api/profiles/me", headers=user["headers"], json=fields)
        assert response.status_code == 200, response.text
        return response.json()
    return _save


@pytest.fixture
def create_listing(client):
    """Factory posting a room listing."""
    def _create(user: dict, **fields):
        payload = {"title": "Sunny room", "city_id": "bangalore", "rent": 15000}
        payload.update(fields)
        response = client.post("/api/listings/", headers=user["headers"], json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _create


@pytest.fixture
def conversation(client, alice, bob):
    """A conversation between alice and bob."""
    response = client.post(
        "/api/conversations/",
        headers=alice["headers"],
        json={"other_user_id": bob["id"]}
    )
    assert response.status_code == 201, response.text
    return response.json()
