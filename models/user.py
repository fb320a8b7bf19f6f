from enum import Enum

from sqlalchemy import Column, String, CheckConstraint
from sqlalchemy.types import Enum as SAEnum

from models.base_model import BaseModel, Base


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"


class User(BaseModel, Base):
    """A registered identity. Only CredentialStore writes these rows."""
    __tablename__ = "users"

    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    role = Column(
        SAEnum(
            Role,
            name="user_role",
            native_enum=False,
            create_constraint=True,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=Role.USER,
    )

    __table_args__ = (
        CheckConstraint("length(name) > 0", name="ck_users_name_nonempty"),
        CheckConstraint("email LIKE '%_@_%._%'", name="ck_users_email_shape"),
    )

    @property
    def password(self):
        raise AttributeError("Password: Write-only field")

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
