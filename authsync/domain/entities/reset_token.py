"""
ResetToken Entity

Short-lived, single-use password reset tokens.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, Index, SQLModel

from authsync.domain.base import utcnow
from .enums import ResetTokenState


class ResetToken(SQLModel):
    """
    ResetToken entity - authorizes one password change for one account.

    Business Rules:
    - Keyed by the SHA-256 hash of the emailed token, never the token itself
    - Invalid strictly after expires_at
    - Single-use: used only ever flips false -> true, except when the
      provider password update fails and the claim is released
    """

    token_hash: str = Field(primary_key=True, max_length=64)
    email: str = Field(max_length=255)
    subject_id: str = Field(max_length=128)

    used: bool = Field(default=False)

    expires_at: datetime = Field(index=True)
    created_at: datetime = Field(default_factory=utcnow)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utcnow()) > self.expires_at

    def state_at(self, now: Optional[datetime] = None) -> ResetTokenState:
        if self.is_expired(now):
            return ResetTokenState.expired
        if self.used:
            return ResetTokenState.used
        return ResetTokenState.issued


class ResetTokenRecord(ResetToken, table=True):
    """Persistent row for the SQL-backed token store"""

    __tablename__ = "password_reset_tokens"

    __table_args__ = (
        Index("idx_password_reset_used", "used"),
    )
