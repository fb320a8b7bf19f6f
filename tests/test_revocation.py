"""Unit tests for models/revocation.py -- the token revocation list."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from marshmallow import ValidationError

from models import storage
from models.blacklisted_token import BlacklistedToken
from models.revocation import RevocationList


@pytest.fixture
def revocations(svc):
    return svc["revocations"]


def _future(hours: int = 1) -> datetime:
    return datetime.now(timezone.utc) + timedelta(hours=hours)


def test_revoke_then_is_revoked(revocations):
    assert revocations.is_revoked("tok-1") is False
    revocations.revoke("tok-1", _future())
    assert revocations.is_revoked("tok-1") is True
    assert revocations.is_revoked("tok-2") is False


def test_revoke_twice_is_a_noop(revocations):
    revocations.revoke("tok-1", _future())
    revocations.revoke("tok-1", _future())
    assert revocations.is_revoked("tok-1") is True
    assert storage.count(BlacklistedToken) == 1


def test_empty_token_rejected(revocations):
    with pytest.raises(ValidationError):
        revocations.revoke("", _future())


def test_expired_records_purged_on_insert(revocations):
    revocations.revoke("old", datetime.now(timezone.utc) - timedelta(minutes=1))
    revocations.revoke("new", _future())
    assert revocations.is_revoked("old") is False
    assert revocations.is_revoked("new") is True


def test_purge_expired_with_explicit_now(svc):
    now = datetime(2026, 6, 1, tzinfo=timezone.utc)
    rl = RevocationList(storage, svc["validator"], clock=lambda: now)
    rl.revoke("a", now + timedelta(hours=1))
    rl.revoke("b", now + timedelta(hours=3))
    assert rl.purge_expired(now + timedelta(hours=2)) == 1
    assert rl.is_revoked("a") is False
    assert rl.is_revoked("b") is True
