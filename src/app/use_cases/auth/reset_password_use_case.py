"""
Reset Password Use Case

Consumes a password reset token, sets the new password and signs the
account in.
"""

import logging
import re

from libs.result import Error, Result, Return
from src.app.services.email_sender import IEmailSender
from src.app.services.password_hasher import PasswordHasher
from src.app.services.reset_token_store import STATE_ERRORS, ResetTokenStore
from src.app.services.session_issuer import SessionIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import Clock, utc_now
from .dtos import AuthenticatedAccount, to_account_info

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128


class ResetPasswordUseCase:
    """
    Use case for completing a password reset.

    Business Rules:
    - Token state is checked first: not_found, expired, used all refuse
    - New password: 8-128 chars, at least one uppercase, lowercase and digit
    - Password update and token consumption commit in one transaction
    - A new session is issued on success
    - The "password changed" notice is best-effort
    """

    def __init__(
        self,
        uow: UnitOfWork,
        password_hasher: PasswordHasher,
        session_issuer: SessionIssuer,
        email_sender: IEmailSender,
        clock: Clock = utc_now,
    ):
        self.uow = uow
        self.password_hasher = password_hasher
        self.session_issuer = session_issuer
        self.email_sender = email_sender
        self._clock = clock

    def _validate_password(self, password: str) -> Result[None]:
        """
        Validate password strength.

        Returns:
            Result with None if valid, or Error(INVALID_PASSWORD)
        """
        if len(password) < PASSWORD_MIN_LENGTH:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
                    field="password",
                )
            )
        if len(password) > PASSWORD_MAX_LENGTH:
            return Return.err(
                Error("INVALID_PASSWORD", "Password too long", field="password")
            )

        rules = [
            (r"[A-Z]", "Password must contain at least one uppercase letter"),
            (r"[a-z]", "Password must contain at least one lowercase letter"),
            (r"[0-9]", "Password must contain at least one number"),
        ]
        for pattern, message in rules:
            if not re.search(pattern, password):
                return Return.err(Error("INVALID_PASSWORD", message, field="password"))

        return Return.ok(None)

    async def execute(self, token: str, new_password: str) -> Result[AuthenticatedAccount]:
        """
        Execute reset password use case.

        Args:
            token: Plaintext reset token from the emailed link
            new_password: New password to set

        Returns:
            Result with AuthenticatedAccount, or Error

        Errors:
            - TOKEN_NOT_FOUND: No token matches
            - TOKEN_EXPIRED: Token has expired
            - TOKEN_ALREADY_USED: Token has already been used
            - INVALID_PASSWORD: Password does not meet strength requirements
        """
        async with self.uow:
            store = ResetTokenStore(self.uow, self._clock)

            validation = await store.validate(token)
            if not validation.is_valid:
                return Return.err(STATE_ERRORS[validation.state])

            password_check = self._validate_password(new_password)
            if password_check.is_err():
                return Return.err(password_check.error)

            consumed = await store.consume(token, self.password_hasher.hash(new_password))
            if consumed.is_err():
                # Leaving the block rolls back the password update
                return Return.err(consumed.error)

            await self.uow.commit()
            account = consumed.value

        notice = await self.email_sender.send_password_changed_notice(account.email)
        if notice.is_err():
            logger.warning(
                f"Password changed notice not delivered for account {account.id}: "
                f"{notice.error.code}"
            )

        return Return.ok(
            AuthenticatedAccount(
                account=to_account_info(account),
                session_token=self.session_issuer.issue(account.id),
            )
        )
