"""
Rate Limiter

Sliding-window limit on password reset requests, backed by the
rate_limit_records table (an append-only event log).
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import Clock, utc_now
from src.domain.entities import RateLimitRecord

RESET_REQUEST_LIMIT = 3
RESET_REQUEST_WINDOW = timedelta(hours=1)


@dataclass(frozen=True)
class RateLimitStatus:
    count: int
    remaining: int
    reset_at: datetime


class RateLimiter:
    """
    Bounds forgot-password requests per email.

    Business Rules:
    - At most 3 requests per email in any trailing hour
    - check_exceeded() runs before record(), so the 4th request is the one rejected
    - record() is called whether or not the email belongs to an account
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock = utc_now,
        limit: int = RESET_REQUEST_LIMIT,
        window: timedelta = RESET_REQUEST_WINDOW,
    ):
        self.uow = uow
        self._clock = clock
        self.limit = limit
        self.window = window

    async def check_exceeded(self, email: str) -> bool:
        since = self._clock() - self.window
        count = await self.uow.rate_limits.count_since(email, since)
        return count >= self.limit

    async def record(self, email: str) -> None:
        await self.uow.rate_limits.create(
            RateLimitRecord(email=email, requested_at=self._clock())
        )

    async def status(self, email: str) -> RateLimitStatus:
        now = self._clock()
        count, oldest = await self.uow.rate_limits.window_stats(email, now - self.window)
        return RateLimitStatus(
            count=count,
            remaining=max(0, self.limit - count),
            reset_at=oldest + self.window if oldest else now,
        )
