"""Reusable dependencies for FastAPI routes."""
from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from movie_catalog.core.config import get_settings
from movie_catalog.core.context import ANONYMOUS, CurrentUser, RequestContext
from movie_catalog.core.gates import require_authenticated, require_movie_owner
from movie_catalog.core.security import SessionSigner
from movie_catalog.db.session import get_session
from movie_catalog.models.movie import Movie
from movie_catalog.services.sessions import get_active_session

SESSION_COOKIE_NAME = "movie_catalog_session"


async def get_db() -> AsyncIterator[AsyncSession]:
    async with get_session() as session:
        yield session


async def get_request_context(
    request: Request,
    session: AsyncSession = Depends(get_db),
) -> RequestContext:
    """Resolve the session cookie into a :class:`RequestContext`.

    A missing, tampered or expired cookie, or a session record that no longer
    exists, yields an anonymous context rather than an error.
    """
    cookie = request.cookies.get(SESSION_COOKIE_NAME)
    if not cookie:
        return ANONYMOUS

    settings = get_settings()
    try:
        payload = SessionSigner().loads(cookie, max_age=settings.session_ttl_seconds)
    except ValueError:
        return ANONYMOUS

    token = payload.get("sid")
    if not isinstance(token, str) or not token:
        return ANONYMOUS

    record = await get_active_session(session, token)
    if record is None:
        return ANONYMOUS
    return RequestContext(user=CurrentUser(id=record.user_id, username=record.username), session_token=token)


async def get_current_user(context: RequestContext = Depends(get_request_context)) -> CurrentUser:
    return require_authenticated(context)


async def get_owned_movie(
    movie_id: int,
    session: AsyncSession = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
    _: CurrentUser = Depends(get_current_user),
) -> Movie:
    return await require_movie_owner(session, context, movie_id)
