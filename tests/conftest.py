"""
Shared pytest fixtures for the SmartStart API test suite.

Provides:
    - app: Flask application (session-scoped, in-memory SQLite)
    - _setup_db: Database table creation/teardown (session-scoped)
    - session: Per-test DB cleanup w/ rollback + recreate (autouse)
    - client: Flask test client (function-scoped)
    - register: helper that registers an account through the API
    - alice / bob: registered users with their bearer headers
"""

import pytest

from smartstart import create_app
from smartstart.models import db as _db


# ── App & DB fixtures ────────────────────────────────────────────────────


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    application = create_app("testing")
    return application


@pytest.fixture(scope="session")
def _setup_db(app):
    """Create all tables at session start, drop at end."""
    with app.app_context():
        _db.create_all()
    yield
    with app.app_context():
        _db.drop_all()


@pytest.fixture(autouse=True)
def session(app, _setup_db):
    """Per-test: open app context, rollback after test, recreate tables."""
    with app.app_context():
        yield
        _db.session.rollback()
        _db.drop_all()
        _db.create_all()


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


# ── Convenience fixtures ─────────────────────────────────────────────────


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def register(client):
    """Register an account via the API and return ``(user, headers)``."""

    def _register(email, password="pw123456", first_name="Test", last_name="User"):
        res = client.post("/api/auth/register", json={
            "email": email,
            "password": password,
            "firstName": first_name,
            "lastName": last_name,
        })
        assert res.status_code == 200, res.get_json()
        data = res.get_json()["data"]
        return data["user"], bearer(data["token"])

    return _register


@pytest.fixture()
def alice(register):
    return register("alice@x.com", first_name="Alice", last_name="A")


@pytest.fixture()
def bob(register):
    return register("bob@x.com", first_name="Bob", last_name="B")
