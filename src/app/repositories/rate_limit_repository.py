from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Tuple

from src.domain.entities import RateLimitRecord


class IRateLimitRepository(ABC):
    """RateLimitRecord repository interface - application layer"""

    @abstractmethod
    async def create(self, record: RateLimitRecord) -> RateLimitRecord:
        """Append a rate limit record"""
        pass

    @abstractmethod
    async def count_since(self, email: str, since: datetime) -> int:
        """Count records for email with requested_at after since"""
        pass

    @abstractmethod
    async def window_stats(
        self, email: str, since: datetime
    ) -> Tuple[int, Optional[datetime]]:
        """Count and oldest requested_at of records for email after since"""
        pass

    @abstractmethod
    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete records with requested_at earlier than cutoff"""
        pass
