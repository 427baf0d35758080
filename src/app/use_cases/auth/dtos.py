"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the credential flows.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from src.domain.entities import Account


# ============================================================================
# Command DTOs
# ============================================================================


class SignupCommand(BaseModel):
    """
    Signup command - represents validated signup intent

    Created by API layer after request validation passes.
    """

    username: str
    email: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class AccountInfo(BaseModel):
    """Public account fields; never includes the password hash"""

    id: str
    username: str
    email: str
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime


class AuthenticatedAccount(BaseModel):
    """
    Output of signup, signin and password reset.

    session_token goes into the Set-Cookie header, not the response body.
    """

    account: AccountInfo
    session_token: str


class ForgotPasswordResponse(BaseModel):
    """Identical for known and unknown emails"""

    message: str


class VerifyResetTokenResponse(BaseModel):
    """Response for verify reset token use case"""

    valid: bool
    email: Optional[str] = None
    reason: Optional[str] = None


def to_account_info(account: Account) -> AccountInfo:
    return AccountInfo(
        id=str(account.id),
        username=account.username,
        email=account.email,
        bio=account.bio,
        avatar_url=account.avatar_url,
        created_at=account.created_at,
    )
