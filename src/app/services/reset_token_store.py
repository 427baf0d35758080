"""
Reset Token Store

Lifecycle of single-use password reset tokens: issue, validate, consume.

The store works inside the caller's Unit of Work and never commits; the
calling use case commits once so that each multi-step operation
(delete-then-insert on issue, update-then-mark-used on consume) lands in a
single transaction.
"""

import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import Clock, utc_now
from src.domain.entities import Account, PasswordResetToken, ResetTokenState

RESET_TOKEN_TTL = timedelta(hours=1)
RESET_TOKEN_BYTES = 32


def generate_reset_token() -> str:
    """URL-safe token for the reset link; 256 bits of entropy"""
    return secrets.token_urlsafe(RESET_TOKEN_BYTES)


def hash_reset_token(token: str) -> str:
    """SHA-256 hex digest (64 chars); only this is persisted"""
    return hashlib.sha256(token.encode()).hexdigest()


def is_token_expired(expires_at: datetime, now: datetime) -> bool:
    return now > expires_at


def is_token_used(used_at: Optional[datetime]) -> bool:
    return used_at is not None


def token_expiration_time(now: datetime) -> datetime:
    return now + RESET_TOKEN_TTL


@dataclass(frozen=True)
class IssuedResetToken:
    token: str  # plaintext, for the email only
    expires_at: datetime


@dataclass(frozen=True)
class TokenValidation:
    state: ResetTokenState
    account_email: Optional[str] = None
    reset_token: Optional[PasswordResetToken] = None

    @property
    def is_valid(self) -> bool:
        return self.state == ResetTokenState.valid


STATE_ERRORS = {
    ResetTokenState.not_found: Error("TOKEN_NOT_FOUND", "Invalid password reset token"),
    ResetTokenState.expired: Error("TOKEN_EXPIRED", "Password reset token has expired"),
    ResetTokenState.used: Error(
        "TOKEN_ALREADY_USED", "Password reset token has already been used"
    ),
}


class ResetTokenStore:
    """
    Generates, persists, validates and consumes password reset tokens.

    Business Rules:
    - Only the SHA-256 hash of a token is stored
    - Issuing deletes every prior token of the account first
      (at most one token per account)
    - Tokens expire 1 hour after issuance
    - A consumed token reports USED from then on, whatever its expiry;
      an unconsumed token past expiry reports EXPIRED
    """

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now):
        self.uow = uow
        self._clock = clock

    async def issue(self, account_id: UUID) -> IssuedResetToken:
        token = generate_reset_token()
        expires_at = token_expiration_time(self._clock())

        await self.uow.password_reset_tokens.delete_by_account_id(account_id)
        await self.uow.password_reset_tokens.create(
            PasswordResetToken(
                account_id=account_id,
                token_hash=hash_reset_token(token),
                expires_at=expires_at,
            )
        )

        return IssuedResetToken(token=token, expires_at=expires_at)

    async def validate(self, token: str) -> TokenValidation:
        reset_token = await self.uow.password_reset_tokens.get_by_token_hash(
            hash_reset_token(token)
        )
        if reset_token is None:
            return TokenValidation(ResetTokenState.not_found)

        if is_token_used(reset_token.used_at):
            return TokenValidation(ResetTokenState.used, reset_token=reset_token)

        if is_token_expired(reset_token.expires_at, self._clock()):
            return TokenValidation(ResetTokenState.expired, reset_token=reset_token)

        account = await self.uow.accounts.get_by_id(reset_token.account_id)
        if account is None:
            return TokenValidation(ResetTokenState.not_found)

        return TokenValidation(
            ResetTokenState.valid,
            account_email=account.email,
            reset_token=reset_token,
        )

    async def consume(self, token: str, new_password_hash: str) -> Result[Account]:
        """
        Apply a new password hash through a reset token.

        The password update and the used_at mark are both flushed into the
        caller's transaction; the caller commits them together.

        Errors:
            - TOKEN_NOT_FOUND: No token matches
            - TOKEN_EXPIRED: Token past its expiry
            - TOKEN_ALREADY_USED: Token consumed before, or by a concurrent request
        """
        validation = await self.validate(token)
        if not validation.is_valid:
            return Return.err(STATE_ERRORS[validation.state])

        reset_token = validation.reset_token
        await self.uow.accounts.update_password_hash(
            reset_token.account_id, new_password_hash
        )

        # Conditional update: loses cleanly against a concurrent consumer
        marked = await self.uow.password_reset_tokens.mark_used(
            reset_token.id, self._clock()
        )
        if not marked:
            return Return.err(STATE_ERRORS[ResetTokenState.used])

        account = await self.uow.accounts.get_by_id(reset_token.account_id)
        return Return.ok(account)
