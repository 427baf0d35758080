"""
Credential cleanup job.

Run from cron (e.g. hourly): python cleanup.py
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.maintenance import CleanupCredentialsUseCase

logging.basicConfig(
    level=ApplicationConfig.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("cleanup")


async def run_cleanup(db_uri: str):
    engine = create_async_engine(db_uri, echo=False, future=True)
    session_factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with session_factory() as session:
            result = await CleanupCredentialsUseCase(SqlAlchemyUnitOfWork(session)).execute()
    finally:
        await engine.dispose()
    return result


def main() -> int:
    logger.info("Starting credential cleanup")
    try:
        result = asyncio.run(run_cleanup(ApplicationConfig.DB_URI))
    except Exception:
        logger.exception("Credential cleanup failed")
        return 1

    summary = result.value
    logger.info(
        f"Cleanup finished: {summary.tokens_deleted} tokens, "
        f"{summary.rate_limits_deleted} rate limit records"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
