from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from libs.result import Return
from src.app.services.password_hasher import PasswordHasher
from src.app.services.session_issuer import SessionIssuer

FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def clock(now):
    return lambda: now


@pytest.fixture
def password_hasher():
    """Cheap Argon2id parameters so unit tests stay fast"""
    return PasswordHasher(memory_cost=1024, time_cost=1, parallelism=1)


@pytest.fixture
def session_issuer(clock):
    return SessionIssuer("unit-test-secret", clock=clock)


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all required repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.get_by_email = AsyncMock(return_value=None)
    uow.accounts.get_by_id = AsyncMock(return_value=None)
    uow.accounts.create = AsyncMock(side_effect=lambda account: account)
    uow.accounts.exists_by_username = AsyncMock(return_value=False)
    uow.accounts.exists_by_email = AsyncMock(return_value=False)
    uow.accounts.update_password_hash = AsyncMock(return_value=True)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.get_by_token_hash = AsyncMock(return_value=None)
    uow.password_reset_tokens.delete_by_account_id = AsyncMock(return_value=0)
    uow.password_reset_tokens.mark_used = AsyncMock(return_value=True)
    uow.password_reset_tokens.delete_expired_before = AsyncMock(return_value=0)

    uow.rate_limits = MagicMock()
    uow.rate_limits.create = AsyncMock(side_effect=lambda record: record)
    uow.rate_limits.count_since = AsyncMock(return_value=0)
    uow.rate_limits.window_stats = AsyncMock(return_value=(0, None))
    uow.rate_limits.delete_older_than = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def email_sender():
    sender = MagicMock()
    sender.send_reset_link = AsyncMock(return_value=Return.ok(None))
    sender.send_password_changed_notice = AsyncMock(return_value=Return.ok(None))
    return sender
