"""
Create the students and payments tables if they do not exist.

Usage: python -m cashier.db.init_db
"""
import asyncio
import logging

from cashier.core.config import settings
from cashier.core.logging import configure_logging
from cashier.core.models import Payment, Student  # noqa: F401
from cashier.db.session import Base, engine

logger = logging.getLogger("cashier.db.init_db")


async def init_db() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))


if __name__ == "__main__":
    configure_logging(settings)
    asyncio.run(init_db())
