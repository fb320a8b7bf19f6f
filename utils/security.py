"""
security helpers:
- Argon2 password hashing via argon2-cffi
- JWT creation/verification via PyJWT
- JTI generation for token identifiers

Both SecretHasher and TokenManager receive their parameters at construction
(see api.create_app) and hold no mutable state afterwards, so one instance is
shared by every request thread.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from models.user import Role
from utils.exceptions import BadSignature, ExpiredToken, InternalFailure, MalformedToken


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SecretHasher:
    """Salted one-way hashing of plaintext secrets.

    Every call to hash() draws a fresh random salt, so hashing the same
    plaintext twice yields two different digests. The salt and the cost
    parameters are embedded in the digest itself.
    """

    def __init__(self, time_cost: int = 10, memory_cost: int = 8192, parallelism: int = 1):
        self._ph = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
        )

    def hash(self, plaintext: str) -> str:
        return self._ph.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        """True iff plaintext matches digest. Malformed digests are a mismatch."""
        try:
            return self._ph.verify(digest, plaintext)
        except (VerificationError, InvalidHashError):
            return False

    def needs_rehash(self, digest: str) -> bool:
        try:
            return self._ph.check_needs_rehash(digest)
        except (InvalidHashError, ValueError):
            return False


def generate_jti() -> str:
    """Generate a unique JTI (JWT ID).
    """
    return str(uuid.uuid4())


@dataclass(frozen=True)
class TokenClaims:
    subject: str
    email: str
    role: Role
    issued_at: datetime
    expires_at: datetime
    jti: str


class TokenManager:
    """Issues and verifies signed bearer tokens.

    The clock is injectable so expiry can be exercised without sleeping.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=24),
        issuer: str = "pantry-api",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self.ttl = ttl
        self._issuer = issuer
        self._clock = clock or _now

    def issue(self, user) -> str:
        """Encode subject id, email and role; expiry is issuance + ttl."""
        now = self._clock()
        payload = {
            "iss": self._issuer,
            "sub": str(user.id),
            "email": user.email,
            "role": Role(user.role).value,
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
            "jti": generate_jti(),
        }
        try:
            return jwt.encode(payload, self._secret, algorithm=self._algorithm)
        except (jwt.PyJWTError, NotImplementedError) as exc:
            raise InternalFailure(reason=f"token signing failed: {exc}") from exc

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token. Raises MalformedToken, BadSignature or
        ExpiredToken. Time claims are checked against the manager's clock.
        """
        if not token or not isinstance(token, str):
            raise MalformedToken("empty token")
        try:
            decoded = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={
                    "require": ["sub", "exp", "iat"],
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except jwt.InvalidSignatureError as exc:
            raise BadSignature(str(exc)) from exc
        except jwt.InvalidTokenError as exc:
            raise MalformedToken(str(exc)) from exc

        try:
            role = Role(decoded["role"])
            issued_at = datetime.fromtimestamp(int(decoded["iat"]), tz=timezone.utc)
            expires_at = datetime.fromtimestamp(int(decoded["exp"]), tz=timezone.utc)
        except (KeyError, ValueError, TypeError, OverflowError, OSError) as exc:
            raise MalformedToken("missing or invalid claims") from exc
        if not decoded.get("sub"):
            raise MalformedToken("missing subject")

        if self._clock() >= expires_at:
            raise ExpiredToken("token expired")

        return TokenClaims(
            subject=decoded["sub"],
            email=decoded.get("email", ""),
            role=role,
            issued_at=issued_at,
            expires_at=expires_at,
            jti=decoded.get("jti", ""),
        )
