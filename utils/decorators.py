"""
Per-request authorization gate.

authorize() runs the steps in order and stops at the first failure:
  1. extract the bearer token            -> Unauthenticated(missing_token)
  2. verify signature / claims / expiry  -> Unauthenticated(malformed | bad_signature | expired)
  3. check the revocation list           -> Unauthenticated(revoked)
  4. build the AuthContext
  5. check the required roles, if any    -> Forbidden(insufficient_role)

jwt_required() / roles_required() wrap a view with it and put the context
on flask.g.auth.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from functools import wraps
from typing import Iterable, Optional

from flask import current_app, g, request

from models.user import Role
from utils.exceptions import Forbidden, TokenError, Unauthenticated

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    user_id: str
    email: str
    role: Role
    token: str
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def extract_bearer(header: Optional[str]) -> Optional[str]:
    if not header:
        return None
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    credentials = credentials.strip()
    return credentials or None


def authorize(header, tokens, revocations, roles: Optional[Iterable[Role]] = None) -> AuthContext:
    token = extract_bearer(header)
    if token is None:
        raise Unauthenticated(reason="missing_token")

    try:
        claims = tokens.verify(token)
    except TokenError as exc:
        raise Unauthenticated(reason=exc.kind) from exc

    if revocations.is_revoked(token):
        raise Unauthenticated(reason="revoked")

    ctx = AuthContext(
        user_id=claims.subject,
        email=claims.email,
        role=claims.role,
        token=token,
        expires_at=claims.expires_at,
    )

    if roles is not None:
        required = {Role(r) for r in roles}
        if ctx.role not in required:
            raise Forbidden(reason="insufficient_role")
    return ctx


def _gate(roles=None) -> AuthContext:
    ext = current_app.extensions["pantry"]
    try:
        return authorize(
            request.headers.get("Authorization"),
            ext["tokens"],
            ext["revocations"],
            roles=roles,
        )
    except (Unauthenticated, Forbidden) as exc:
        logger.info("denied %s %s: %s", request.method, request.path, exc.reason)
        raise


def jwt_required():
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            g.auth = _gate()
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def roles_required(*roles: Role):
    """
    Allow access if the token's role is one of roles.
    401 when the token is missing or bad, 403 when the role does not match.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            g.auth = _gate(roles=roles)
            return fn(*args, **kwargs)

        return wrapper

    return decorator
