"""Periodic assignment lifecycle sweep."""

import logging
from datetime import date
from typing import Dict, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from availability_engine.config import settings
from availability_engine.services.lifecycle import AssignmentLifecycle
from availability_engine.tasks.broker import broker

logger = logging.getLogger(__name__)


@broker.task(
    retry_on_error=True,
    max_retries=2,
    schedule=[{"cron": f"*/{settings.LIFECYCLE_SWEEP_INTERVAL_MINUTES} * * * *"}],
)
async def advance_assignments_task(today: Optional[str] = None) -> Dict:
    """
    Start approved assignments whose window began and end the ones that are over.

    Args:
        today: ISO date to sweep for, defaults to the current date

    Returns:
        Counts of started and ended assignments
    """
    engine = create_async_engine(settings.DATABASE_URL)
    async_session = async_sessionmaker(engine, expire_on_commit=False)

    try:
        async with async_session() as session:
            lifecycle = AssignmentLifecycle(
                session,
                today=date.fromisoformat(today) if today else None,
            )
            counts = await lifecycle.advance()
    finally:
        await engine.dispose()

    logger.info(f"Lifecycle task finished: {counts}")
    return counts
