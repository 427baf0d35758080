from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        """Get password reset token by token hash"""
        pass

    @abstractmethod
    async def delete_by_account_id(self, account_id: UUID) -> int:
        """Delete every password reset token owned by an account"""
        pass

    @abstractmethod
    async def mark_used(self, token_id: UUID, used_at: datetime) -> bool:
        """Set used_at on a still-unused token; returns False if it was already used"""
        pass

    @abstractmethod
    async def delete_expired_before(self, cutoff: datetime) -> int:
        """Delete tokens whose expires_at is earlier than cutoff"""
        pass
