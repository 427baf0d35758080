"""
Forgot Password Use Case

Rate-limits, issues a single active reset token and emails the reset link.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from libs.result import Error, Result, Return
from src.app.services.email_sender import IEmailSender
from src.app.services.rate_limiter import RateLimiter
from src.app.services.reset_token_store import IssuedResetToken, ResetTokenStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import Clock, utc_now
from src.domain.entities import normalize_email
from .dtos import ForgotPasswordResponse

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "If your email is registered, you'll receive a password reset link"
RATE_LIMITED = Error(
    "RATE_LIMITED",
    "Too many password reset requests. Please wait before requesting another reset",
)

# A concurrent request for the same account can win the unique account_id
# slot; one retry replaces its token with ours.
ISSUE_ATTEMPTS = 2


class ForgotPasswordUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - 3 requests per email per trailing hour; the 4th is rejected (429)
    - Every accepted request is recorded, whether or not the account exists
    - Prior tokens of the account are deleted before the new one is stored
    - Same response for known and unknown emails (no enumeration)
    - A failed reset-link delivery surfaces as EMAIL_DELIVERY_FAILED
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        app_base_url: str,
        clock: Clock = utc_now,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.app_base_url = app_base_url
        self._clock = clock

    async def execute(self, email: str) -> Result[ForgotPasswordResponse]:
        """
        Execute forgot password use case.

        Args:
            email: Email address as submitted

        Returns:
            Result with the generic message, or Error

        Errors:
            - RATE_LIMITED: 3 requests already recorded in the last hour
            - EMAIL_DELIVERY_FAILED: Reset link could not be sent
        """
        email = normalize_email(email)

        for attempt in range(1, ISSUE_ATTEMPTS + 1):
            try:
                outcome = await self._request_reset(email)
                break
            except IntegrityError:
                if attempt == ISSUE_ATTEMPTS:
                    raise
                logger.info("Concurrent reset token issue detected, retrying")

        if outcome.is_err():
            return outcome

        issued: Optional[IssuedResetToken] = outcome.value
        if issued is not None:
            sent = await self.email_sender.send_reset_link(
                email, issued.token, self.app_base_url
            )
            if sent.is_err():
                return Return.err(sent.error)

        return Return.ok(ForgotPasswordResponse(message=GENERIC_MESSAGE))

    async def _request_reset(self, email: str) -> Result[Optional[IssuedResetToken]]:
        async with self.uow:
            rate_limiter = RateLimiter(self.uow, self._clock)

            # Check before recording so the request over the limit is the one refused
            if await rate_limiter.check_exceeded(email):
                limit_status = await rate_limiter.status(email)
                logger.warning(
                    f"Password reset rate limit hit, next slot at {limit_status.reset_at}"
                )
                return Return.err(RATE_LIMITED)

            account = await self.uow.accounts.get_by_email(email)

            await rate_limiter.record(email)

            issued = None
            if account is not None:
                store = ResetTokenStore(self.uow, self._clock)
                issued = await store.issue(account.id)

            await self.uow.commit()

        return Return.ok(issued)
