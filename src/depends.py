from typing import Optional
from uuid import UUID

from fastapi import Depends, Request

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.email_sender import IEmailSender
from src.app.services.password_hasher import PasswordHasher
from src.app.services.session_issuer import SESSION_COOKIE_NAME, SessionIssuer
from src.domain.base import Clock, utc_now


def get_config(request: Request):
    return request.app.state.config


async def get_unit_of_work(request: Request):
    async with request.app.state.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_session_issuer(request: Request) -> SessionIssuer:
    return request.app.state.session_issuer


def get_email_sender(request: Request) -> IEmailSender:
    return request.app.state.email_sender


def get_clock() -> Clock:
    return utc_now


async def get_current_account_id(
    request: Request,
    session_issuer: SessionIssuer = Depends(get_session_issuer),
) -> Optional[UUID]:
    """
    Resolve the session cookie to an account id.

    Never fails: a missing, tampered or expired cookie resolves to None
    (anonymous).
    """
    result = session_issuer.verify(request.cookies.get(SESSION_COOKIE_NAME))
    if result.is_err():
        return None
    return result.value

