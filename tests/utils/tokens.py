from typing import List
from uuid import UUID

from sqlmodel import select

from src.domain.entities import PasswordResetToken


async def reset_tokens_of(session, account_id: UUID) -> List[PasswordResetToken]:
    """Every stored reset token row for an account"""
    result = await session.exec(
        select(PasswordResetToken).where(PasswordResetToken.account_id == account_id)
    )
    return list(result.all())
