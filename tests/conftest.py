from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from devconnector_api.app.core import db as db_module
from devconnector_api.app.main import create_app


@pytest.fixture
def test_app_client() -> Iterator[TestClient]:
    """API client backed by an in-memory Mongo double.

    The client is not entered as a context manager, so the startup hook
    (index creation) does not run against the double.
    """
    db_module.set_client(AsyncMongoMockClient())
    app = create_app()
    yield TestClient(app)
    db_module.set_client(None)


@pytest.fixture
def make_user(test_app_client) -> Callable[..., dict]:
    """Register a user through the API and return its id, token and headers."""
    counter = {"n": 0}

    def _make_user(name: str = None, email: str = None) -> dict:
        counter["n"] += 1
        name = name or f"User {counter['n']}"
        email = email or f"user{counter['n']}@example.com"
        resp = test_app_client.post(
            "/api/users",
            json={"name": name, "email": email, "password": "secret123"},
        )
        assert resp.status_code == 200, resp.text
        token = resp.json()["token"]
        headers = {"Authorization": f"Bearer {token}"}
        me = test_app_client.get("/api/auth", headers=headers).json()
        return {"id": me["_id"], "name": name, "avatar": me["avatar"], "token": token, "headers": headers}

    return _make_user


@pytest.fixture
def authorized_client(test_app_client, make_user):
    user = make_user("Alice", "alice@example.com")
    return test_app_client, user
