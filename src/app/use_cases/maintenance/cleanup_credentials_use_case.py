"""
Use Case: Cleanup Credentials

Periodic purge of stale password reset tokens and rate-limit records.
Run by an external scheduler (cron via cleanup.py) or the admin endpoint.
"""

import logging
from datetime import timedelta
from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import Clock, utc_now

logger = logging.getLogger(__name__)

# Expired tokens stay inspectable for a day before removal
TOKEN_RETENTION = timedelta(hours=24)
# Well past the 1-hour counting window
RATE_LIMIT_RETENTION = timedelta(hours=24)


class CleanupResponse(BaseModel):
    """Response DTO for CleanupCredentialsUseCase"""

    tokens_deleted: int
    rate_limits_deleted: int


class CleanupCredentialsUseCase:
    """
    Purge rows that no invariant depends on any more.

    Business Logic:
    1. Delete reset tokens whose expires_at is more than 24h in the past
    2. Delete rate-limit records requested more than 24h ago

    Both purges are idempotent, order-independent and commit separately,
    so they are safe to run at any cadence alongside live traffic.
    """

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now):
        self.uow = uow
        self._clock = clock

    async def purge_expired_tokens(self) -> int:
        cutoff = self._clock() - TOKEN_RETENTION
        async with self.uow:
            deleted = await self.uow.password_reset_tokens.delete_expired_before(cutoff)
            await self.uow.commit()
        logger.info(f"Cleaned up {deleted} expired password reset tokens")
        return deleted

    async def purge_stale_rate_limits(self) -> int:
        cutoff = self._clock() - RATE_LIMIT_RETENTION
        async with self.uow:
            deleted = await self.uow.rate_limits.delete_older_than(cutoff)
            await self.uow.commit()
        logger.info(f"Cleaned up {deleted} old rate limit records")
        return deleted

    async def execute(self) -> Result[CleanupResponse]:
        """
        Run both purges.

        Returns:
            Result[CleanupResponse] with deletion counts
        """
        tokens_deleted = await self.purge_expired_tokens()
        rate_limits_deleted = await self.purge_stale_rate_limits()

        return Return.ok(
            CleanupResponse(
                tokens_deleted=tokens_deleted,
                rate_limits_deleted=rate_limits_deleted,
            )
        )
