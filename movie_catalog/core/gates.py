"""Authentication and ownership gates.

A gate either returns what the next stage needs (the current user, the
owned movie) or raises :class:`GateDenied` describing where the request
should be diverted. Gates never build responses themselves; the
application's exception handler turns a denial into a redirect with a
notice, or into a JSON failure for API-style requests.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from movie_catalog.core.context import CurrentUser, RequestContext
from movie_catalog.models.movie import Movie
from movie_catalog.services.movies import get_movie

logger = logging.getLogger(__name__)

LOGIN_URL = "/login"
CATALOG_URL = "/"


class DenialReason(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    SERVER_ERROR = "server_error"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    DenialReason.UNAUTHENTICATED: 401,
    DenialReason.NOT_FOUND: 404,
    DenialReason.FORBIDDEN: 403,
    DenialReason.SERVER_ERROR: 500,
}


@dataclass(frozen=True, slots=True)
class Denial:
    reason: DenialReason
    message: str
    redirect_to: str


class GateDenied(Exception):
    """Raised when a gate refuses to let a request through."""

    def __init__(self, denial: Denial) -> None:
        super().__init__(denial.message)
        self.denial = denial


def movie_url(movie_id: int) -> str:
    return f"/movies/{movie_id}"


def require_authenticated(context: RequestContext | None) -> CurrentUser:
    if context is None or context.user is None:
        raise GateDenied(Denial(DenialReason.UNAUTHENTICATED, "You need to log in first", LOGIN_URL))
    return context.user


async def require_movie_owner(session: AsyncSession, context: RequestContext, movie_id: int) -> Movie:
    """Fetch ``movie_id`` and make sure the authenticated user created it.

    Must run after :func:`require_authenticated`; an anonymous context is
    rejected the same way here.
    """
    user = require_authenticated(context)
    try:
        movie = await get_movie(session, movie_id)
    except SQLAlchemyError as exc:
        logger.exception("Error checking ownership of movie %s", movie_id)
        raise GateDenied(Denial(DenialReason.SERVER_ERROR, "Server error", CATALOG_URL)) from exc

    if movie is None:
        raise GateDenied(Denial(DenialReason.NOT_FOUND, "Movie not found", CATALOG_URL))
    if movie.created_by != user.id:
        raise GateDenied(
            Denial(
                DenialReason.FORBIDDEN,
                "You can only edit or delete movies you created",
                movie_url(movie.id),
            )
        )
    return movie
