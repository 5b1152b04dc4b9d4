"""
Test configuration for the clinic API.
"""
import os

# The application engine must never touch a real database during tests
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BOOTSTRAP_OWNER_EMAIL"] = ""
os.environ["BOOTSTRAP_OWNER_PASSWORD"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clinic_api.config import Settings, get_settings
from clinic_api.database import Base, get_db
from clinic_api.main import app
from clinic_api.core import security
from clinic_api.auth.schemas import SignupRequest
from clinic_api.auth.service import AuthService

# Minimum bcrypt cost keeps the suite fast; hashing behaviour is unchanged
security.pwd_context.update(bcrypt__default_rounds=4)

# Test database URL
TEST_DATABASE_URL = "sqlite://"

# Create test database engine
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def test_settings():
    """
    Explicit settings for tests, independent of the environment.
    """
    return Settings(
        _env_file=None,
        jwt_secret="test-secret",
        jwt_expires_in="1h",
        invite_expiry_hours=72,
    )


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def auth_service(db, test_settings):
    return AuthService(db, test_settings)


@pytest.fixture
def owner(auth_service):
    """
    A clinic created through signup; returns the owner's AuthResponse.
    """
    return auth_service.signup(SignupRequest(
        clinic_name="Demo Clinic",
        owner_email="owner@x.com",
        owner_name="Owner",
        password="password1",
    ))


@pytest.fixture(scope="function")
def client(db, test_settings):
    """
    Create a test client with a test database session.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings

    with TestClient(app) as client:
        yield client

    app.dependency_overrides = {}


@pytest.fixture
def bearer():
    """Build an Authorization header for a session token."""
    def _bearer(token: str) -> dict:
        return {"Authorization": f"Bearer {token}"}
    return _bearer
