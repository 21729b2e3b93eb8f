"""Shared test fixtures for authgate."""

import pytest

from authgate.app import create_app
from authgate.auth.schemas import Role
from authgate.auth.service import AuthService
from authgate.config import Settings
from authgate.db import init_db

TEST_SECRET = "test-secret-key-that-is-at-least-32-bytes-long"


@pytest.fixture
def make_settings(tmp_path):
    """Factory for Settings pointing at a temp-file database.

    Uses bcrypt work factor 4 so hashing stays fast. Keyword arguments
    override individual fields.
    """
    def _make(**overrides) -> Settings:
        values = {
            "database_path": str(tmp_path / "authgate.db"),
            "jwt_secret_key": TEST_SECRET,
            "bcrypt_work_factor": 4,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def settings(make_settings) -> Settings:
    return make_settings()


@pytest.fixture
def service(settings) -> AuthService:
    """AuthService over a freshly initialized database."""
    init_db(settings.database_path)
    return AuthService.from_settings(settings)


@pytest.fixture
def app(settings):
    """Flask app sharing the database used by the service fixture."""
    flask_app = create_app(settings)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def registered_user(service):
    """Register a regular user.

    Returns a tuple of (username, password).
    """
    service.register("bob", "hunter2")
    return "bob", "hunter2"


@pytest.fixture
def admin_user(service):
    """Register an admin user.

    Returns a tuple of (username, password).
    """
    service.register("root", "s3cret-admin", role=Role.ADMIN)
    return "root", "s3cret-admin"


@pytest.fixture
def user_token(service, registered_user) -> str:
    username, password = registered_user
    return service.login(username, password).token


@pytest.fixture
def admin_token(service, admin_user) -> str:
    username, password = admin_user
    return service.login(username, password).token


@pytest.fixture
def auth_headers(user_token) -> dict:
    """Authorization header for the regular user."""
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture
def admin_headers(admin_token) -> dict:
    """Authorization header for the admin user."""
    return {"Authorization": f"Bearer {admin_token}"}
