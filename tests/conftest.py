"""
Pytest configuration and shared fixtures.

Every test gets its own SQLite file in a temporary directory.
"""
import logging
import os
import shutil
import tempfile

import pytest
from fastapi.testclient import TestClient

from todoboard.app import create_app
from todoboard.config import Settings
from todoboard.data.seed_data import ADMINISTRATOR_PASSWORD, ADMINISTRATOR_USER_NAME
from todoboard.database import Base, create_db_engine, create_session_factory
from todoboard.identity.provider import SqlAlchemyIdentityProvider
from todoboard.logging_config import installed_handlers

TEST_JWT_SECRET = "test-secret-that-is-at-least-32-bytes-long"


@pytest.fixture(autouse=True)
def reset_root_logging():
    """Remove the handlers setup_logging installed and restore the root level."""
    root = logging.getLogger()
    saved_level = root.level
    yield
    for handler in installed_handlers(root):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(saved_level)


@pytest.fixture
def temp_db_dir():
    """Create a temporary directory for the test database."""
    temp_dir = tempfile.mkdtemp(prefix="todoboard_test_")
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def database_url(temp_db_dir, monkeypatch):
    monkeypatch.delenv("TODOBOARD_DATABASE_URL", raising=False)
    return f"sqlite:///{os.path.join(temp_db_dir, 'test_todoboard.db')}"


@pytest.fixture
def settings(database_url):
    return Settings(database_url=database_url, jwt_secret=TEST_JWT_SECRET)


@pytest.fixture
def engine(database_url):
    engine = create_db_engine(database_url, echo=False)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def session(engine, session_factory):
    """Session on a freshly created, empty schema."""
    Base.metadata.create_all(bind=engine)
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def identity(session):
    return SqlAlchemyIdentityProvider(session)


@pytest.fixture
def client(settings, engine):
    """TestClient whose startup has reset and seeded the database."""
    app = create_app(settings=settings, engine=engine)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login(client):
    """Return a function that logs in and returns the token response body."""
    def _login(email=ADMINISTRATOR_USER_NAME, password=ADMINISTRATOR_PASSWORD):
        response = client.post("/api/Users/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()
    return _login


@pytest.fixture
def auth_headers(login):
    """Authorization header of the seeded administrator."""
    return {"Authorization": f"Bearer {login()['access_token']}"}
