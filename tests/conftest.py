"""Pytest fixtures and configuration for FocusFlow tests."""

import os

# Cheap bcrypt for tests; must be set before focusflow.auth.passwords is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import uuid
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from focusflow.auth.jwt import create_access_token
from focusflow.auth.passwords import hash_password
from focusflow.database.database import Base, Database, get_db
from focusflow.database.session_repository import SessionRepository
from focusflow.database.user_repository import UserRepository
from focusflow.models.session import PomodoroSession, SessionType
from focusflow.models.user import Preferences, User


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

TEST_PASSWORD = "s3cret-pass"


@pytest.fixture(scope="function")
def database():
    """A fresh in-memory database with the schema created."""
    db = Database(TEST_DATABASE_URL)
    db.init_schema()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=db.engine)
        db.engine.dispose()


@pytest.fixture(scope="function")
def db_session(database):
    """Create a database session for testing."""
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_repository(db_session: Session):
    return UserRepository(db_session)


@pytest.fixture
def session_repository(db_session: Session):
    """Create a SessionRepository instance for testing."""
    return SessionRepository(db_session)


def make_user(user_repository: UserRepository, username: str, email: str, password: str = TEST_PASSWORD) -> User:
    now = datetime.utcnow()
    return user_repository.create(User(
        id=str(uuid.uuid4()),
        username=username,
        email=email,
        password_hash=hash_password(password),
        preferences=Preferences(),
        created_at=now,
        updated_at=now,
    ))


@pytest.fixture
def test_user(user_repository):
    """The primary test user, persisted."""
    return make_user(user_repository, "alice", "alice@example.com")


@pytest.fixture
def test_user_id(test_user):
    return test_user.id


@pytest.fixture
def other_user(user_repository):
    """A second user for cross-user isolation tests."""
    return make_user(user_repository, "bob", "bob@example.com")


@pytest.fixture
def sample_session_base(test_user_id):
    """Base session data; override fields as needed."""
    return {
        "id": str(uuid.uuid4()),
        "user_id": test_user_id,
        "start_time": datetime.utcnow() - timedelta(minutes=30),
        "end_time": None,
        "duration": 25,
        "type": SessionType.WORK,
        "completed": False,
        "task": None,
        "interruptions": [],
        "productivity": None,
        "notes": None,
    }


@pytest.fixture
def sample_session(sample_session_base):
    return PomodoroSession(**sample_session_base)



@pytest.fixture
def auth_headers(test_user):
    return {"Authorization": f"Bearer {create_access_token(test_user.id)}"}


@pytest.fixture
def other_auth_headers(other_user):
    return {"Authorization": f"Bearer {create_access_token(other_user.id)}"}


@pytest.fixture
def test_client(database, db_session: Session):
    """Create a FastAPI test client bound to the test database session."""
    from focusflow.api.app import create_app

    app = create_app(database=database)

    # Share the test session so reads in tests see the app's writes
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db

    # No context manager: schema is already created and the fixture owns disposal
    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()
