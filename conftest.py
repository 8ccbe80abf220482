"""
Shared pytest fixtures

Points the app at a throwaway SQLite database and upload directory. The
environment must be set before any apps.* module is imported because
configuration is read at import time.
"""
import os
import shutil
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="portfolio-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["UPLOAD_DIR"] = os.path.join(_TMP_DIR, "uploads")
os.environ["UPLOAD_BACKEND"] = "local"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["ENVIRONMENT"] = "test"
os.environ.pop("ADMIN_WHITELIST_IPS", None)

import pytest
from fastapi.testclient import TestClient

import apps.auth.login_attempts as login_attempts_module
from apps.auth.login_attempts import login_attempts
from apps.portfolio.main import app
from apps.shared.auth import create_access_token, hash_password
from apps.shared.database import Base, SessionLocal, engine
from apps.uploads.storage import UPLOAD_DIR
from apps.users.models import User, UserRole

DEFAULT_PASSWORD = "password123"


@pytest.fixture(autouse=True)
def no_login_delays(monkeypatch):
    """Repeated failed logins would otherwise sleep for real."""
    monkeypatch.setattr(login_attempts_module, "LOGIN_DELAYS", ())


@pytest.fixture(autouse=True)
def clean_state():
    """Empty every table, the upload directory and the login tracker after each test."""
    yield
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
    shutil.rmtree(UPLOAD_DIR, ignore_errors=True)
    os.makedirs(UPLOAD_DIR, exist_ok=True)
    login_attempts.reset()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def make_user(db, email, role=UserRole.EDITOR, name="Test User", password=DEFAULT_PASSWORD):
    user = User(name=name, email=email, password=hash_password(password), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user):
    token = create_access_token(user.id, user.email, user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(db):
    return make_user(db, "admin@example.com", UserRole.ADMIN, name="Admin")


@pytest.fixture
def editor_user(db):
    return make_user(db, "editor@example.com", UserRole.EDITOR, name="Editor")


@pytest.fixture
def admin_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture
def editor_headers(editor_user):
    return auth_headers(editor_user)


@pytest.fixture
def gql(client):
    """Run a GraphQL operation and return the decoded response body."""

    def run(query, variables=None, headers=None):
        response = client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers or {},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return run


def error_code(body):
    """Code extension of the first GraphQL error."""
    assert body.get("errors"), body
    return body["errors"][0].get("extensions", {}).get("code")
