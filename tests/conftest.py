"""Pytest configuration and fixtures."""

import os
import tempfile
from pathlib import Path

# Settings are read once at import time, so point them at throwaway locations
# before anything from the application is imported.
_TEST_DIR = Path(tempfile.mkdtemp(prefix="marketplace-tests-"))
TEST_DB_PATH = _TEST_DIR / "test.db"

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
os.environ["UPLOAD_DIR"] = str(_TEST_DIR / "uploads")
os.environ["AUTO_CREATE_SCHEMA"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret"  # noqa: S105

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402

from marketplace.database import Base, SessionLocal  # noqa: E402
from marketplace.main import app  # noqa: E402

# Schema setup and cleanup go through a plain sync engine on the same file.
engine = create_engine(f"sqlite:///{TEST_DB_PATH}")


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield
    engine.dispose()


@pytest.fixture(scope="function", autouse=True)
def clean_tables():
    """Empty every table after each test."""
    yield
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
async def session():
    """Async database session for repository tests."""
    async with SessionLocal() as db:
        yield db


@pytest.fixture(scope="function")
def client():
    """Create a test client; entering it runs the application lifespan."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    """Return a helper that registers and logs in a user, yielding auth headers."""

    def _register(email: str, name: str = "Test User", password: str = "testpass123"):
        response = client.post(
            "/register", json={"name": name, "email": email, "password": password}
        )
        assert response.status_code == 200
        user_id = response.json()["user_id"]

        response = client.post("/login", json={"email": email, "password": password})
        assert response.status_code == 200
        token = response.json()["token"]

        return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user_id, email=email)

    return _register


@pytest.fixture
def auth_headers(register_user):
    """Create a user and return auth headers with user info."""
    return register_user("test@example.com")


@pytest.fixture
def other_auth_headers(register_user):
    """A second, unrelated user."""
    return register_user("other@example.com", name="Other User")


@pytest.fixture
def create_listing(client):
    """Return a helper that creates a listing through the API and returns its id."""

    def _create(headers, **fields):
        data = {"title": "Bike", "location": "NY", "price": "100"}
        data.update({key: str(value) for key, value in fields.items()})
        response = client.post("/listings", headers=headers, data=data)
        assert response.status_code == 200, response.json()
        return response.json()["id"]

    return _create
