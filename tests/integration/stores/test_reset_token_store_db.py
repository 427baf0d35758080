"""
Integration tests for ResetTokenStore against SQLite

Covers the lifecycle invariants that depend on real constraints and
conditional updates.
"""
from datetime import datetime, timedelta

import pytest

from src.app.services.reset_token_store import RESET_TOKEN_TTL, ResetTokenStore
from src.domain.entities import Account, ResetTokenState
from tests.utils.clock import FrozenClock
from tests.utils.tokens import reset_tokens_of

T0 = datetime(2024, 6, 1, 12, 0, 0)


async def create_account(uow, username="alice", email="alice@example.com"):
    return await uow.accounts.create(
        Account(username=username, username_key=username, email=email, password_hash="old")
    )


@pytest.mark.asyncio
async def test_only_latest_issued_token_survives(uow, db_session):
    clock = FrozenClock(T0)
    async with uow:
        account = await create_account(uow)
        store = ResetTokenStore(uow, clock)

        issued = [await store.issue(account.id) for _ in range(3)]
        await uow.commit()

        tokens = await reset_tokens_of(db_session, account.id)
        assert len(tokens) == 1
        assert (await store.validate(issued[-1].token)).is_valid
        assert (await store.validate(issued[0].token)).state == ResetTokenState.not_found
        assert (await store.validate(issued[1].token)).state == ResetTokenState.not_found


@pytest.mark.asyncio
async def test_token_is_valid_up_to_and_including_expiry(uow):
    clock = FrozenClock(T0)
    async with uow:
        account = await create_account(uow)
        store = ResetTokenStore(uow, clock)
        issued = await store.issue(account.id)
        await uow.commit()

        assert issued.expires_at == T0 + RESET_TOKEN_TTL

        clock.now = issued.expires_at
        validation = await store.validate(issued.token)
        assert validation.is_valid
        assert validation.account_email == "alice@example.com"

        clock.advance(timedelta(seconds=1))
        assert (await store.validate(issued.token)).state == ResetTokenState.expired


@pytest.mark.asyncio
async def test_consume_is_single_use(uow):
    clock = FrozenClock(T0)
    async with uow:
        account = await create_account(uow)
        store = ResetTokenStore(uow, clock)
        issued = await store.issue(account.id)
        await uow.commit()

        first = await store.consume(issued.token, "new-hash")
        await uow.commit()
        second = await store.consume(issued.token, "newer-hash")

        assert first.is_ok()
        assert second.is_err()
        assert second.error.code == "TOKEN_ALREADY_USED"

        reloaded = await uow.accounts.get_by_id(account.id)
        assert reloaded.password_hash == "new-hash"


@pytest.mark.asyncio
async def test_used_token_stays_used_after_expiry(uow):
    clock = FrozenClock(T0)
    async with uow:
        account = await create_account(uow)
        store = ResetTokenStore(uow, clock)
        issued = await store.issue(account.id)
        await store.consume(issued.token, "new-hash")
        await uow.commit()

        clock.advance(timedelta(hours=2))
        assert (await store.validate(issued.token)).state == ResetTokenState.used


@pytest.mark.asyncio
async def test_consume_after_expiry_is_refused(uow):
    clock = FrozenClock(T0)
    async with uow:
        account = await create_account(uow)
        store = ResetTokenStore(uow, clock)
        issued = await store.issue(account.id)
        await uow.commit()

        clock.advance(RESET_TOKEN_TTL + timedelta(minutes=1))
        result = await store.consume(issued.token, "new-hash")

        assert result.error.code == "TOKEN_EXPIRED"
