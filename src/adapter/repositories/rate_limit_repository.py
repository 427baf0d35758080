from datetime import datetime
from typing import Optional, Tuple

from sqlalchemy import delete, func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.rate_limit_repository import IRateLimitRepository
from src.domain.entities import RateLimitRecord


class RateLimitRepository(IRateLimitRepository):
    """RateLimitRecord repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, record: RateLimitRecord) -> RateLimitRecord:
        """Append a rate limit record"""
        self.session.add(record)
        await self.session.flush()
        return record

    async def count_since(self, email: str, since: datetime) -> int:
        stmt = select(func.count()).select_from(RateLimitRecord).where(
            RateLimitRecord.email == email,
            RateLimitRecord.requested_at > since,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def window_stats(
        self, email: str, since: datetime
    ) -> Tuple[int, Optional[datetime]]:
        stmt = select(func.count(), func.min(RateLimitRecord.requested_at)).where(
            RateLimitRecord.email == email,
            RateLimitRecord.requested_at > since,
        )
        result = await self.session.execute(stmt)
        count, oldest = result.one()
        return count, oldest

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete records requested before cutoff"""
        stmt = delete(RateLimitRecord).where(RateLimitRecord.requested_at < cutoff)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
