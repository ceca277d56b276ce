"""
Central pytest configuration for the hospital back office tests.

Environment variables are set before any ``hms`` import so the lazy engine
binds to an in-memory SQLite database and rate limiting stays off.
"""

import os

# Test database configuration (set early so import-time engines use it)
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["TESTING"] = "true"
os.environ["RATE_LIMIT_ENABLED"] = "0"  # Disable rate limiting in tests
os.environ["LOG_TO_FILE"] = "0"
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-with-enough-length")

import pytest  # noqa: E402

from hms.core.auth_decorators import PERMISSION_REGISTRY  # noqa: E402
from hms.core.security import create_user_token  # noqa: E402
from hms.db.session import SessionLocal, create_tables, drop_tables  # noqa: E402
from hms.main import create_app  # noqa: E402
from tests.config.markers import (  # noqa: E402,F401
    pytest_collection_modifyitems,
    pytest_configure,
)


@pytest.fixture
def db_session():
    """Fresh schema per test on the shared in-memory connection."""
    create_tables()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        drop_tables()


@pytest.fixture
def app(db_session):
    """Application with permission checks enforced."""
    return create_app({"TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def open_client(db_session):
    """Test client with permission checks bypassed (LOGIN_DISABLED)."""
    return create_app({"TESTING": True, "LOGIN_DISABLED": True}).test_client()


@pytest.fixture
def make_auth_headers():
    """Build bearer headers for a token carrying the given permission names."""

    def _make(*permissions, user_id=1, email="tester@example.com"):
        token = create_user_token(user_id, "Tester", email, permissions)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def admin_headers(app, make_auth_headers):
    """Headers for a token holding every registered permission."""
    return make_auth_headers(*sorted(PERMISSION_REGISTRY))
