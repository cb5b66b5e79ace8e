"""Pytest configuration and fixtures."""

import os
import re
from dataclasses import dataclass

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.api.dependencies import get_mailer, get_picture_storage
from src.config import get_settings
from src.database import Base, get_db
from src.exceptions import DeliveryError
from src.main import app
from src.models.user import User
from src.services.storage import PictureStorage

TEST_PASSWORD = "testpass123"  # noqa: S105


class AuthHeaders(dict):
    """Dict subclass that also stores user_id, email and profile_id."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None,
                 profile_id: int | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.profile_id = profile_id


@dataclass
class SentEmail:
    to: str
    subject: str
    html: str


class FakeMailer:
    """In-memory mail transport that can be told to fail."""

    def __init__(self):
        self.outbox: list[SentEmail] = []
        self.fail = False

    def send(self, to: str, subject: str, html: str) -> None:
        if self.fail:
            raise DeliveryError("SMTP server unavailable")
        self.outbox.append(SentEmail(to, subject, html))

    def last_code(self, to: str) -> int:
        """Extract the code from the most recent email sent to ``to``."""
        for email in reversed(self.outbox):
            if email.to == to:
                return int(re.search(r"<strong>(\d{6})</strong>", email.html).group(1))
        raise AssertionError(f"No email sent to {to}")


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL") + "_test"
else:
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


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def storage(tmp_path):
    return PictureStorage(tmp_path / "pictures")


@pytest.fixture(scope="function")
def client(db, mailer, storage):
    """Create a test client with database, mailer and storage overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_picture_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register_and_login(client, db, email: str, password: str = TEST_PASSWORD) -> AuthHeaders:
    """Register a user through the API and return bearer headers for it."""
    response = client.post(
        "/api/register",
        json={"email": email, "password": password, "firstName": "Test", "lastName": "User"},
    )
    assert response.status_code == 201

    response = client.post("/api/login", json={"email": email, "password": password})
    assert response.status_code == 200
    token = response.json()["token"]

    user = db.query(User).filter(User.email == email).one()
    return AuthHeaders(
        {"Authorization": f"Bearer {token}"},
        user_id=user.id,
        email=email,
        profile_id=user.profile_id,
    )


@pytest.fixture
def auth_headers(client, db):
    """Create a user and return auth headers with user info."""
    return register_and_login(client, db, "test@example.com")


@pytest.fixture
def other_auth_headers(client, db):
    """A second, unrelated user."""
    return register_and_login(client, db, "other@example.com")
