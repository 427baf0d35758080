"""
RateLimitRecord Entity

Append-only log of password reset request attempts.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class RateLimitRecord(SQLModel, table=True):
    """
    RateLimitRecord entity - one row per forgot-password attempt.

    Keyed by raw email rather than account so that recording does not
    depend on whether the account exists.
    """

    __tablename__ = "rate_limit_records"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255)
    requested_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_rate_limit_email_requested_at", "email", "requested_at"),
        Index("idx_rate_limit_requested_at", "requested_at"),
    )
