"""
Pytest configuration and fixtures for UserPrefs API tests.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from userprefs.database import Base, get_db
from userprefs.limiter import limiter
from userprefs.main import app
from userprefs.seed import seed_users
from userprefs.services.settings_service import SettingsService
from userprefs.services.settings_store import SettingsStore

# Disable rate limiting for tests
limiter.enabled = False

# Use in-memory SQLite for tests with shared connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Global session for sharing across requests
_test_session = None


def get_test_db():
    """Get the shared test database session."""
    yield _test_session


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    global _test_session

    Base.metadata.create_all(bind=engine)
    _test_session = TestingSessionLocal()
    app.dependency_overrides[get_db] = get_test_db

    yield _test_session

    app.dependency_overrides.clear()
    _test_session.close()
    _test_session = None
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def seeded_db(db):
    """Database holding the sample users."""
    seed_users(db)
    return db


@pytest.fixture(scope="function")
def client(db):
    """Create a test client; each one gets a fresh settings store."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def store():
    return SettingsStore()


@pytest.fixture(scope="function")
def service(store):
    return SettingsService(store)
