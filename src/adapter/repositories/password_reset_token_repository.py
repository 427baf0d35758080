from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        """Get password reset token by token hash"""
        stmt = select(PasswordResetToken).where(PasswordResetToken.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def delete_by_account_id(self, account_id: UUID) -> int:
        """Delete every password reset token owned by an account"""
        stmt = delete(PasswordResetToken).where(PasswordResetToken.account_id == account_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def mark_used(self, token_id: UUID, used_at: datetime) -> bool:
        """Set used_at only if the token has not been used yet"""
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.id == token_id,
                PasswordResetToken.used_at.is_(None),
            )
            .values(used_at=used_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_expired_before(self, cutoff: datetime) -> int:
        """Delete tokens that expired before cutoff"""
        stmt = delete(PasswordResetToken).where(PasswordResetToken.expires_at < cutoff)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
