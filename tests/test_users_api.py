"""Integration tests for /api/v1/users/<email> -- profile read, update, delete."""

from __future__ import annotations

from conftest import auth_header, login, register


def test_read_own_profile(client, user_token):
    resp = client.get("/api/v1/users/user@example.com", headers=auth_header(user_token))
    assert resp.status_code == 200
    assert resp.get_json()["data"]["role"] == "user"


def test_cannot_read_someone_else(client, user_token):
    register(client, "other@example.com")
    resp = client.get("/api/v1/users/other@example.com", headers=auth_header(user_token))
    assert resp.status_code == 403


def test_admin_reads_anyone(client, admin_token):
    register(client, "other@example.com")
    assert client.get("/api/v1/users/other@example.com", headers=auth_header(admin_token)).status_code == 200
    assert client.get("/api/v1/users/ghost@example.com", headers=auth_header(admin_token)).status_code == 404


def test_update_password_rehashes(client, user_token):
    resp = client.patch(
        "/api/v1/users/user@example.com",
        json={"password": "newsecret", "name": "Renamed"},
        headers=auth_header(user_token),
    )
    assert resp.status_code == 200
    assert resp.get_json()["data"]["name"] == "Renamed"
    assert client.post("/api/v1/auth/login", json={"email": "user@example.com", "password": "secret1"}).status_code == 401
    login(client, "user@example.com", "newsecret")


def test_user_cannot_escalate_role(client, user_token):
    resp = client.patch("/api/v1/users/user@example.com", json={"role": "admin"}, headers=auth_header(user_token))
    assert resp.status_code == 403
    me = client.get("/api/v1/users/user@example.com", headers=auth_header(user_token)).get_json()["data"]
    assert me["role"] == "user"


def test_admin_changes_role(client, admin_token):
    register(client, "other@example.com")
    resp = client.patch("/api/v1/users/other@example.com", json={"role": "admin"}, headers=auth_header(admin_token))
    assert resp.status_code == 200
    assert resp.get_json()["data"]["role"] == "admin"


def test_update_rejects_unknown_and_invalid_fields(client, user_token):
    headers = auth_header(user_token)
    assert client.patch("/api/v1/users/user@example.com", json={"email": "x@y.com"}, headers=headers).status_code == 400
    assert client.patch("/api/v1/users/user@example.com", json={"password": "123"}, headers=headers).status_code == 400


def test_delete_own_account(client, user_token):
    headers = auth_header(user_token)
    assert client.delete("/api/v1/users/user@example.com", headers=headers).status_code == 204
    # the presenting token was revoked along with the account
    assert client.get("/api/v1/auth/me", headers=headers).status_code == 401


def test_admin_delete_missing_is_not_found(client, admin_token):
    headers = auth_header(admin_token)
    register(client, "other@example.com")
    assert client.delete("/api/v1/users/other@example.com", headers=headers).status_code == 204
    assert client.delete("/api/v1/users/other@example.com", headers=headers).status_code == 404


def test_token_outlives_deleted_identity_but_profile_is_gone(client, admin_token):
    register(client, "other@example.com")
    token = login(client, "other@example.com")
    client.delete("/api/v1/users/other@example.com", headers=auth_header(admin_token))
    assert client.get("/api/v1/auth/me", headers=auth_header(token)).status_code == 404


def test_stale_token_cannot_touch_reregistered_email(client):
    register(client, "a@x.com")
    first = login(client, "a@x.com")
    second = login(client, "a@x.com")
    assert client.delete("/api/v1/users/a@x.com", headers=auth_header(first)).status_code == 204

    # a new owner takes the same address
    assert register(client, "a@x.com", "newowner1", "New").status_code == 201

    stale = auth_header(second)
    assert client.get("/api/v1/users/a@x.com", headers=stale).status_code == 403
    resp = client.patch("/api/v1/users/a@x.com", json={"password": "hijacked"}, headers=stale)
    assert resp.status_code == 403
    assert client.delete("/api/v1/users/a@x.com", headers=stale).status_code == 403

    assert client.post("/api/v1/auth/login", json={"email": "a@x.com", "password": "hijacked"}).status_code == 401
    login(client, "a@x.com", "newowner1")


def test_deleted_identity_sees_own_address_as_missing(client, admin_token):
    register(client, "other@example.com")
    token = login(client, "other@example.com")
    client.delete("/api/v1/users/other@example.com", headers=auth_header(admin_token))
    headers = auth_header(token)
    assert client.get("/api/v1/users/other@example.com", headers=headers).status_code == 404
    assert client.delete("/api/v1/users/other@example.com", headers=headers).status_code == 404
    # someone else's missing address does not reveal absence
    assert client.get("/api/v1/users/ghost@example.com", headers=headers).status_code == 403
