"""
Shared fixtures: an in-memory SQLite database per test, the FastAPI app wired
to it, and a fake image host that records uploads and deletions.
"""
import os

# Must be set before config.settings is imported anywhere
os.environ["APP_ENV"] = "development"
os.environ["DB_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config.db import get_db
from model import load_all_models
from model.base import Base
from src.app import app
from src.storage_service import get_image_host, parse_image_payload

load_all_models()

# 1x1 transparent PNG
PNG_DATA_URI = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


class FakeImageHost:
    """Stands in for the S3 image host; keeps every call for assertions."""

    def __init__(self):
        self.uploads = []
        self.destroyed = []

    def upload(self, payload: str) -> str:
        parse_image_payload(payload)
        url = f"https://images.test/social-images/IMG-{len(self.uploads) + 1:04d}.png"
        self.uploads.append(url)
        return url

    def destroy(self, url: str) -> bool:
        self.destroyed.append(url)
        return True


@pytest.fixture(scope="function")
def engine():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def image_host():
    return FakeImageHost()


@pytest.fixture
def api(session_factory, image_host):
    """The app with its database and image host swapped for test doubles."""

    def _get_db():
        db = session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_image_host] = lambda: image_host
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(api):
    return TestClient(api)


@pytest.fixture
def new_client(api):
    """Factory for extra clients, each with its own cookie jar."""
    def _make():
        return TestClient(api)
    return _make


@pytest.fixture
def signed_up(new_client):
    """Factory: sign a user up on a fresh client and return (client, profile)."""
    def _signup(username, email=None, password="secret1", full_name=None):
        c = new_client()
        resp = c.post("/api/auth/signup", json={
            "username": username,
            "email": email or f"{username}@example.com",
            "password": password,
            "fullName": full_name or username.title(),
        })
        assert resp.status_code == 201, resp.text
        return c, resp.json()
    return _signup


@pytest.fixture
def png_payload():
    return PNG_DATA_URI
