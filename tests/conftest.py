"""Pytest configuration and fixtures."""

import os

# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally.
# Must be decided before src is imported so the app engine uses it too.
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/user_crud", "/user_crud_test")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src.database import Base, engine, get_db  # noqa: E402
from src.main import app  # noqa: E402
from src.services.auth import TokenService  # noqa: E402
from src.services.user_service import UserService  # noqa: E402
from src.services.user_store import UserStore  # noqa: E402

TEST_SECRET = os.environ["JWT_SECRET"]
TEST_PASSWORD = "testpass123"

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and credentials."""

    def __init__(
        self,
        *args,
        user_id: str | None = None,
        email: str | None = None,
        password: str | None = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.password = password


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    from src import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


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
def tokens():
    """Token service using the test secret."""
    return TokenService(secret=TEST_SECRET)


@pytest.fixture
def store(db):
    """User store bound to the test session."""
    return UserStore(db)


@pytest.fixture
def user_service(store, tokens):
    """User service wired to the test store."""
    return UserService(store, tokens)


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


@pytest.fixture
def auth_headers(client, user_service):
    """Create a user out of band, log in, and return auth headers with user info."""
    user = user_service.register("Test User", "test@example.com", TEST_PASSWORD)

    response = client.post(
        "/login",
        json={"email": "test@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    token = response.json()["data"]["token"]

    return AuthHeaders(
        {"Authorization": f"Bearer {token}"},
        user_id=user.id,
        email=user.email,
        password=TEST_PASSWORD,
    )
