"""Server-side session store backed by the ``sessions`` table."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from movie_catalog.core.config import get_settings
from movie_catalog.core.security import generate_session_token
from movie_catalog.models.session import SessionRecord
from movie_catalog.models.user import User

logger = logging.getLogger(__name__)


async def create_session(session: AsyncSession, user: User, ttl_seconds: int | None = None) -> SessionRecord:
    ttl = ttl_seconds if ttl_seconds is not None else get_settings().session_ttl_seconds
    record = SessionRecord(
        token=generate_session_token(),
        user_id=user.id,
        username=user.username,
        expires_at=datetime.now(timezone.utc) + timedelta(seconds=ttl),
    )
    session.add(record)
    await session.flush()
    return record


async def get_active_session(session: AsyncSession, token: str) -> SessionRecord | None:
    """Return the session for ``token`` unless it is missing or expired."""
    result = await session.execute(
        select(SessionRecord).where(
            SessionRecord.token == token,
            SessionRecord.expires_at > datetime.now(timezone.utc),
        )
    )
    return result.scalar_one_or_none()


async def destroy_session(session: AsyncSession, token: str) -> None:
    await session.execute(delete(SessionRecord).where(SessionRecord.token == token))
    await session.flush()


async def purge_expired_sessions(session: AsyncSession) -> int:
    result = await session.execute(
        delete(SessionRecord).where(SessionRecord.expires_at <= datetime.now(timezone.utc))
    )
    await session.flush()
    removed = result.rowcount or 0
    if removed:
        logger.info("Purged %d expired session(s)", removed)
    return removed
