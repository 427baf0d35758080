"""
PasswordResetToken Entity

Secure, single-use password reset grants.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity - one outstanding password reset grant.

    Business Rules:
    - Expires 1 hour after issuance
    - Only the SHA-256 hash of the emailed token is stored
    - Single-use: used_at is set on consumption
    - At most one token per account (account_id is unique)
    - Purged 24 hours after expiry
    """

    __tablename__ = "reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    account_id: UUID = Field(foreign_key="accounts.id", unique=True)
    token_hash: str = Field(unique=True, max_length=64)  # SHA-256 output

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    used_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_reset_token_expires_at", "expires_at"),)
