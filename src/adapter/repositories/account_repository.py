from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.account_repository import IAccountRepository
from src.domain.entities import Account, normalize_email


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by email address"""
        stmt = select(Account).where(Account.email == normalize_email(email))
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        stmt = select(Account).where(Account.id == account_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, account: Account) -> Account:
        """Create a new account"""
        account.email = normalize_email(account.email)
        account.username_key = account.username.lower()
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def exists_by_username(self, username: str) -> bool:
        stmt = select(func.count()).select_from(Account).where(
            Account.username_key == username.lower()
        )
        result = await self.session.execute(stmt)
        return result.scalar_one() > 0

    async def exists_by_email(self, email: str) -> bool:
        stmt = select(func.count()).select_from(Account).where(
            Account.email == normalize_email(email)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one() > 0

    async def update_password_hash(self, account_id: UUID, password_hash: str) -> bool:
        """Replace the stored password hash"""
        stmt = (
            update(Account)
            .where(Account.id == account_id)
            .values(password_hash=password_hash)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
