"""
CredentialStore: the only writer of User rows.

- Input is validated against the "identity" schema before anything is hashed.
- Plaintext is hashed before the row is added to the session; returned
  objects are dumped through UserOutSchema, which has no secret field.
- authenticate() raises the same InvalidCredentials for an unknown email and
  a wrong password, and does the same hashing work in both cases.

The duplicate-email check in register() is a fast path. Two concurrent
registrations may both pass it; the UNIQUE constraint on users.email decides,
and the loser gets DuplicateIdentity from the IntegrityError.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError

from models.schemas.validator import SchemaValidator
from models.user import Role, User
from utils.exceptions import DuplicateIdentity, InvalidCredentials, NotFound
from utils.security import SecretHasher

logger = logging.getLogger(__name__)


def normalize_email(email) -> str:
    return email.strip().lower() if isinstance(email, str) else email


class CredentialStore:
    def __init__(self, storage, hasher: SecretHasher, validator: SchemaValidator):
        self._storage = storage
        self._hasher = hasher
        self._validator = validator
        # Verified against when the email is unknown so both failure paths cost the same
        self._dummy_digest = hasher.hash("pantry-timing-equalizer")

    def _session(self):
        return self._storage.get_session()

    def find_by_email(self, email: str) -> Optional[User]:
        return self._session().query(User).filter(User.email == normalize_email(email)).first()

    def get(self, user_id: str) -> Optional[User]:
        return self._storage.get(User, user_id)

    def list(self, page: int = 1, limit: int = 20) -> Tuple[list, int]:
        query = self._session().query(User)
        total = query.count()
        rows = query.order_by(User.created_at.asc(), User.email.asc()).offset((page - 1) * limit).limit(limit).all()
        return rows, total

    def register(self, email: str, password: str, name: str, role: Role | str | None = None) -> User:
        document = {"email": email, "password": password, "name": name}
        if role is not None:
            document["role"] = role.value if isinstance(role, Role) else role
        data = self._validator.enforce("identity", document)

        if self.find_by_email(data["email"]) is not None:
            raise DuplicateIdentity()

        user = User(
            email=data["email"],
            password_hash=self._hasher.hash(data["password"]),
            name=data["name"],
            role=data["role"],
        )
        self._storage.new(user)
        try:
            self._storage.save()
        except IntegrityError:
            # lost the race against a concurrent registration
            logger.info("duplicate registration caught by unique constraint")
            raise DuplicateIdentity()
        logger.info("registered identity %s with role %s", user.id, user.role.value)
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self.find_by_email(email) if isinstance(email, str) else None
        if user is None:
            self._hasher.verify(password or "", self._dummy_digest)
            raise InvalidCredentials(reason="unknown_email")
        if not self._hasher.verify(password or "", user.password_hash):
            raise InvalidCredentials(reason="password_mismatch")

        if self._hasher.needs_rehash(user.password_hash):
            user.password_hash = self._hasher.hash(password)
            self._storage.new(user)
            self._storage.save()
            logger.info("re-hashed secret for identity %s with current parameters", user.id)
        return user

    def update_by_email(self, email: str, changes: dict) -> User:
        """
        Apply a partial update. A supplied password is re-hashed before it is
        written. Role changes are accepted as given; who may change a role is
        decided by the caller.
        """
        user = self.find_by_email(email)
        if user is None:
            raise NotFound("Identity not found")

        changes = {k: v.value if isinstance(v, Role) else v for k, v in (changes or {}).items()}
        data = self._validator.enforce("identity", changes, partial=True)
        if "email" in data and data["email"] != user.email:
            if self.find_by_email(data["email"]) is not None:
                raise DuplicateIdentity()
            user.email = data["email"]
        if "name" in data:
            user.name = data["name"]
        if "role" in data:
            user.role = data["role"]
        if "password" in data:
            user.password_hash = self._hasher.hash(data["password"])

        self._storage.new(user)
        try:
            self._storage.save()
        except IntegrityError:
            raise DuplicateIdentity()
        return user

    def delete_by_email(self, email: str) -> None:
        user = self.find_by_email(email)
        if user is None:
            raise NotFound("Identity not found")
        self._storage.delete(user)
        self._storage.save()
        logger.info("deleted identity %s", user.id)
