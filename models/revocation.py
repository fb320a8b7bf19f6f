"""
RevocationList: token strings invalidated before their natural expiry.

revoke() is idempotent. Expired rows are purged lazily on insert; that only
bounds table growth, since an expired token is rejected by verification
whether or not it is listed here.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError

from models.blacklisted_token import BlacklistedToken
from models.schemas.validator import SchemaValidator

logger = logging.getLogger(__name__)


def _aware(dt: datetime) -> datetime:
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


class RevocationList:
    def __init__(self, storage, validator: SchemaValidator, clock=None):
        self._storage = storage
        self._validator = validator
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _session(self):
        return self._storage.get_session()

    def is_revoked(self, token: str) -> bool:
        session = self._session()
        return session.query(
            session.query(BlacklistedToken).filter(BlacklistedToken.token == token).exists()
        ).scalar()

    def revoke(self, token: str, expires_at: datetime) -> None:
        expires_at = _aware(expires_at)
        self._validator.enforce(
            "token-blacklist",
            {"token": token, "expires_at": expires_at.isoformat()},
        )
        self.purge_expired()
        if self.is_revoked(token):
            return

        self._storage.new(BlacklistedToken(token=token, expires_at=expires_at))
        try:
            self._storage.save()
        except IntegrityError:
            # revoked concurrently by another request; same post-condition
            logger.debug("token already revoked")

    def purge_expired(self, now: datetime | None = None) -> int:
        now = _aware(now or self._clock())
        removed = (
            self._session()
            .query(BlacklistedToken)
            .filter(BlacklistedToken.expires_at <= now)
            .delete(synchronize_session=False)
        )
        if removed:
            self._storage.save()
            logger.info("purged %d expired revocation records", removed)
        return removed
