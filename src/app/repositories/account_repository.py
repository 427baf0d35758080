from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Account


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by (normalized) email address"""
        pass

    @abstractmethod
    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Create a new account; raises IntegrityError on a uniqueness clash"""
        pass

    @abstractmethod
    async def exists_by_username(self, username: str) -> bool:
        """Case-insensitive username existence check"""
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Case-insensitive email existence check"""
        pass

    @abstractmethod
    async def update_password_hash(self, account_id: UUID, password_hash: str) -> bool:
        """Replace the stored password hash; returns False if no such account"""
        pass
