from datetime import timedelta

import pytest

from src.app.services.rate_limiter import RESET_REQUEST_WINDOW, RateLimiter


@pytest.mark.asyncio
async def test_under_limit_is_not_exceeded(mock_uow, clock, now):
    mock_uow.rate_limits.count_since.return_value = 2

    exceeded = await RateLimiter(mock_uow, clock).check_exceeded("user@example.com")

    assert exceeded is False
    mock_uow.rate_limits.count_since.assert_called_once_with(
        "user@example.com", now - RESET_REQUEST_WINDOW
    )


@pytest.mark.asyncio
async def test_limit_reached_is_exceeded(mock_uow, clock):
    mock_uow.rate_limits.count_since.return_value = 3

    assert await RateLimiter(mock_uow, clock).check_exceeded("user@example.com") is True


@pytest.mark.asyncio
async def test_record_stores_request_at_clock_time(mock_uow, clock, now):
    await RateLimiter(mock_uow, clock).record("user@example.com")

    record = mock_uow.rate_limits.create.call_args.args[0]
    assert record.email == "user@example.com"
    assert record.requested_at == now


@pytest.mark.asyncio
async def test_status_reports_remaining_and_reset_time(mock_uow, clock, now):
    oldest = now - timedelta(minutes=20)
    mock_uow.rate_limits.window_stats.return_value = (2, oldest)

    status = await RateLimiter(mock_uow, clock).status("user@example.com")

    assert status.count == 2
    assert status.remaining == 1
    assert status.reset_at == oldest + RESET_REQUEST_WINDOW


@pytest.mark.asyncio
async def test_status_without_requests_resets_now(mock_uow, clock, now):
    status = await RateLimiter(mock_uow, clock).status("user@example.com")

    assert status.count == 0
    assert status.remaining == 3
    assert status.reset_at == now
