"""Background scheduler for session housekeeping."""
from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.exc import SQLAlchemyError

from movie_catalog.core.config import get_settings
from movie_catalog.db.session import get_session
from movie_catalog.services.sessions import purge_expired_sessions

logger = logging.getLogger(__name__)

PURGE_JOB_ID = "purge-expired-sessions"

_scheduler: AsyncIOScheduler | None = None


def get_scheduler() -> AsyncIOScheduler:
    global _scheduler
    if _scheduler is None:
        _scheduler = AsyncIOScheduler()
    return _scheduler


def start_scheduler() -> None:
    scheduler = get_scheduler()
    if not scheduler.running:
        scheduler.start()
        logger.info("Scheduler started")


def schedule_session_purge_job() -> None:
    settings = get_settings()
    scheduler = get_scheduler()
    trigger = IntervalTrigger(seconds=settings.session_purge_interval_seconds)
    scheduler.add_job(_purge_sessions, trigger=trigger, id=PURGE_JOB_ID, replace_existing=True)
    logger.info("Scheduled %s every %s seconds", PURGE_JOB_ID, trigger.interval.total_seconds())


async def _purge_sessions() -> None:
    async with get_session() as session:
        try:
            await purge_expired_sessions(session)
            await session.commit()
        except SQLAlchemyError:
            logger.exception("Failed to purge expired sessions")
            await session.rollback()
