"""
tests/conftest.py -- shared fixtures.

Every test gets a fresh app on the "testing" config: in-memory SQLite
(one StaticPool connection, so the test client and the test body see the same
database) and the cheapest argon2 parameters.
"""

from __future__ import annotations

import pytest

from api import create_app
from models import storage

PASSWORD = "secret1"


@pytest.fixture
def app():
    app = create_app("testing")
    yield app
    storage.close()
    storage.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def svc(app):
    """The collaborators create_app built: stores, token manager, validator..."""
    return app.extensions["pantry"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client, email: str, password: str = PASSWORD, name: str = "Tester", role: str | None = None):
    body = {"email": email, "password": password, "name": name}
    if role is not None:
        body["role"] = role
    return client.post("/api/v1/auth/register", json=body)


def login(client, email: str, password: str = PASSWORD) -> str:
    resp = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()["token"]


@pytest.fixture
def user_token(client):
    register(client, "user@example.com")
    return login(client, "user@example.com")


@pytest.fixture
def admin_token(client):
    register(client, "admin@example.com", role="admin")
    return login(client, "admin@example.com")


STORE = {"name": "Corner Market", "location": "Main St 1"}


def item_payload(store_id: str, **overrides) -> dict:
    body = {
        "name": "Milk",
        "category": "Dairy",
        "quantity": 2,
        "unit": "liters",
        "storage_location": "Fridge",
        "price": 1.49,
        "barcodes": [{"code": "4006381333931"}],
        "store_id": store_id,
    }
    body.update(overrides)
    return body
