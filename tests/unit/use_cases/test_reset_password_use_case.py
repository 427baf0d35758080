"""
Unit tests for ResetPasswordUseCase

Tests all business logic with mocked dependencies.
"""
from datetime import timedelta
from uuid import uuid4

import pytest

from libs.result import Error, Return
from src.app.services.reset_token_store import hash_reset_token
from src.app.use_cases.auth import ResetPasswordUseCase
from src.domain.entities import Account, PasswordResetToken


@pytest.fixture
def account():
    return Account(
        id=uuid4(),
        username="alice",
        username_key="alice",
        email="alice@example.com",
        password_hash="old-hash",
    )


@pytest.fixture
def valid_token(mock_uow, account, now):
    reset_token = PasswordResetToken(
        id=uuid4(),
        account_id=account.id,
        token_hash=hash_reset_token("tok"),
        expires_at=now + timedelta(minutes=30),
    )
    mock_uow.password_reset_tokens.get_by_token_hash.return_value = reset_token
    mock_uow.accounts.get_by_id.return_value = account
    return reset_token


@pytest.fixture
def use_case(mock_uow, password_hasher, session_issuer, email_sender, clock):
    return ResetPasswordUseCase(mock_uow, password_hasher, session_issuer, email_sender, clock)


@pytest.mark.asyncio
async def test_successful_reset(use_case, mock_uow, valid_token, account, password_hasher,
                                session_issuer, email_sender, now):
    result = await use_case.execute("tok", "NewSecure123")

    assert result.is_ok()
    assert session_issuer.verify(result.value.session_token).value == account.id

    account_id, new_hash = mock_uow.accounts.update_password_hash.call_args.args
    assert account_id == account.id
    assert password_hasher.verify(new_hash, "NewSecure123")
    mock_uow.password_reset_tokens.mark_used.assert_called_once_with(valid_token.id, now)
    mock_uow.commit.assert_called_once()
    email_sender.send_password_changed_notice.assert_called_once_with("alice@example.com")


@pytest.mark.asyncio
async def test_unknown_token(use_case, mock_uow):
    result = await use_case.execute("missing", "NewSecure123")

    assert result.error.code == "TOKEN_NOT_FOUND"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_used_token(use_case, mock_uow, valid_token, now):
    valid_token.used_at = now - timedelta(minutes=1)

    result = await use_case.execute("tok", "NewSecure123")

    assert result.error.code == "TOKEN_ALREADY_USED"
    mock_uow.accounts.update_password_hash.assert_not_called()


@pytest.mark.asyncio
async def test_token_state_is_checked_before_password_strength(use_case, valid_token, now):
    valid_token.expires_at = now - timedelta(seconds=1)

    result = await use_case.execute("tok", "weak")

    assert result.error.code == "TOKEN_EXPIRED"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "password",
    ["Short1", "alllowercase1", "ALLUPPERCASE1", "NoDigitsHere", "A1" + "a" * 127],
)
async def test_weak_password_is_rejected(use_case, mock_uow, valid_token, password):
    result = await use_case.execute("tok", password)

    assert result.error.code == "INVALID_PASSWORD"
    mock_uow.accounts.update_password_hash.assert_not_called()
    mock_uow.password_reset_tokens.mark_used.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_consume_is_not_committed(use_case, mock_uow, valid_token):
    mock_uow.password_reset_tokens.mark_used.return_value = False

    result = await use_case.execute("tok", "NewSecure123")

    assert result.error.code == "TOKEN_ALREADY_USED"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_notice_failure_does_not_fail_reset(use_case, valid_token, email_sender):
    email_sender.send_password_changed_notice.return_value = Return.err(
        Error("EMAIL_DELIVERY_FAILED", "Email could not be sent")
    )

    result = await use_case.execute("tok", "NewSecure123")

    assert result.is_ok()
