from sqlalchemy import Column, Text, DateTime, CheckConstraint

from models.base_model import BaseModel, Base


class BlacklistedToken(BaseModel, Base):
    """A token string revoked before its natural expiry.

    expires_at mirrors the token's own exp claim; past that instant the
    row can be purged since the token fails verification anyway.
    """
    __tablename__ = "blacklisted_tokens"

    token = Column(Text, nullable=False, unique=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)

    __table_args__ = (
        CheckConstraint("length(token) > 0", name="ck_blacklisted_tokens_token_nonempty"),
    )

    def __repr__(self):
        return f"<BlacklistedToken id={self.id} expires_at={self.expires_at}>"
