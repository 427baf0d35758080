from datetime import datetime, timedelta

import pytest

from src.app.services.rate_limiter import RateLimiter
from tests.utils.clock import FrozenClock

T0 = datetime(2024, 6, 1, 12, 0, 0)


@pytest.mark.asyncio
async def test_three_requests_per_hour_window(uow):
    clock = FrozenClock(T0)
    limiter = RateLimiter(uow, clock)

    async with uow:
        for _ in range(3):
            assert await limiter.check_exceeded("alice@example.com") is False
            await limiter.record("alice@example.com")
            clock.advance(timedelta(minutes=1))
        await uow.commit()

        assert await limiter.check_exceeded("alice@example.com") is True
        # Other emails have their own budget
        assert await limiter.check_exceeded("bob@example.com") is False

        clock.now = T0 + timedelta(hours=1)
        assert await limiter.check_exceeded("alice@example.com") is False


@pytest.mark.asyncio
async def test_status_tracks_oldest_request(uow):
    clock = FrozenClock(T0)
    limiter = RateLimiter(uow, clock)

    async with uow:
        await limiter.record("alice@example.com")
        clock.advance(timedelta(minutes=10))
        await limiter.record("alice@example.com")
        await uow.commit()

        status = await limiter.status("alice@example.com")

        assert status.count == 2
        assert status.remaining == 1
        assert status.reset_at == T0 + timedelta(hours=1)
