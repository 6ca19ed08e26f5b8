"""
PasswordResetToken Entity

Single-use, time-boxed password reset tokens.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from session_gate.domain.base import utc_now


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity - authorizes one password change for one user.

    Business Rules:
    - Expires one hour after creation (configurable)
    - Only the SHA-256 hash of the token is stored
    - Single-use: used flips false -> true exactly once, together with
      the password update
    - Rows are kept after use or expiry
    """

    __tablename__ = "password_reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", index=True)
    token_hash: str = Field(unique=True, max_length=64)  # SHA-256 output

    used: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_password_reset_expires_at", "expires_at"),
        Index("idx_password_reset_used", "used"),
    )

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
