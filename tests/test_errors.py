"""Tests for api/errors.py -- the JSON error envelope."""

from __future__ import annotations


def test_unhandled_exception_is_opaque_500(app):
    def explode():
        raise RuntimeError("database password is hunter2")

    app.add_url_rule("/explode", "explode", explode)
    resp = app.test_client().get("/explode")
    assert resp.status_code == 500
    assert resp.get_json() == {
        "error": "INTERNAL_ERROR",
        "message": "An unexpected error occurred",
        "status": 500,
    }


def test_unknown_route_is_not_found(client):
    resp = client.get("/api/v1/nope")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "NOT_FOUND"
