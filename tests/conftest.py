"""
Shared pytest fixtures for the Taskboard test suite.

This module contains fixtures that are shared across all test modules.
Fixtures follow the Arrange-Act-Assert (AAA) pattern and ensure
test isolation by resetting the data file and the session store
around every test.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies
- Test data factories
- Data file setup/teardown
- Test client creation
"""

import os
import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"
os.environ.setdefault(
    "TEST_DATA_FILE",
    str(Path(tempfile.mkdtemp(prefix="taskboard-tests-")) / "database.json"),
)

from taskboard import create_app
from taskboard.models import Snapshot, Task, User
from taskboard.services import add_task, register_user


# Initialize Faker for generating test data
fake = Faker()

DEFAULT_PASSWORD = "StrongPass123!"


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """
    Create application instance for the test session.

    The 'session' scope means the same app instance is reused for all
    tests; per-test isolation comes from the ``data_store`` fixture.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def data_store(app):
    """
    Provide the application's data store, emptied before and after each test.

    Also drops every server-side session so no login leaks between tests.

    Args:
        app: Flask application fixture.

    Yields:
        The :class:`~taskboard.store.JsonFileStore` used by the app.
    """
    store = app.extensions["taskboard.data_store"]
    sessions = app.extensions["taskboard.session_store"]
    store.save(Snapshot())
    sessions.clear()
    yield store
    store.save(Snapshot())
    sessions.clear()


@pytest.fixture(scope="function")
def session_store(app, data_store):
    """Provide the application's server-side session store."""
    return app.extensions["taskboard.session_store"]


@pytest.fixture(scope="function")
def client(app, data_store):
    """
    Create a test client for making HTTP requests.

    Args:
        app: Flask application fixture.
        data_store: Ensures the data file is reset for this test.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def user_factory(data_store) -> Callable[..., User]:
    """
    Factory fixture for registering users directly through the service layer.

    Example:
        def test_something(user_factory):
            user = user_factory(username="alice")
    """

    def _create_user(
        username: str | None = None,
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        return register_user(data_store, username or fake.unique.user_name(), password)

    return _create_user


@pytest.fixture
def task_factory(data_store) -> Callable[..., Task]:
    """Factory fixture for adding tasks owned by a given user."""

    def _create_task(owner: str, text: str | None = None) -> Task:
        return add_task(data_store, owner, text or fake.sentence(nb_words=4))

    return _create_task


# -----------------------------------------------------------------------------
# HTTP Helper Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def login(app, data_store) -> Callable:
    """
    Provide a helper that logs a test client in.

    Returns:
        Function ``login(client, username, password)`` returning the
        login response.
    """

    def _login(test_client, username: str, password: str = DEFAULT_PASSWORD):
        return test_client.post(
            "/login",
            json={"username": username, "password": password},
        )

    return _login


@pytest.fixture
def auth_client(app, client, user_factory, login):
    """
    Provide a test client already logged in as a freshly registered user.

    The user is available as ``auth_client.user``.
    """
    user = user_factory()
    response = login(client, user.username)
    assert response.status_code == 302
    client.user = user
    return client


@pytest.fixture
def other_client(app, data_store, user_factory, login):
    """Provide a second, independently logged-in test client."""
    user = user_factory()
    # No ``with`` block: only the primary client preserves its request context.
    test_client = app.test_client()
    response = login(test_client, user.username)
    assert response.status_code == 302
    test_client.user = user
    return test_client
