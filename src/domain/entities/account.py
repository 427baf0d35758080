"""
Account Entity

Identity record for a person who posts on Tweeter.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utc_now


def normalize_email(email: str) -> str:
    return email.strip().lower()


class Account(SQLModel, table=True):
    """
    Account entity - the long-lived identity aggregate.

    Business Rules:
    - Username is 3-20 chars, unique case-insensitively (via username_key)
    - Email is stored lower-cased and is unique
    - Password stored as Argon2id hash, never exposed
    - Never deleted by the credential subsystem
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(max_length=20)
    username_key: str = Field(unique=True, index=True, max_length=20)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=255)

    bio: Optional[str] = Field(default=None, max_length=160)
    avatar_url: Optional[str] = Field(default=None, max_length=500)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
