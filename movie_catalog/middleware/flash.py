"""One-shot notices carried across a redirect in a signed cookie."""
from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from movie_catalog.core.config import get_settings
from movie_catalog.core.security import SessionSigner

logger = logging.getLogger(__name__)

FLASH_COOKIE_NAME = "movie_catalog_flash"
FLASH_MAX_AGE = 5 * 60


def _signer() -> SessionSigner:
    return SessionSigner(salt="movie-catalog-flash")


def flash(request: Request, category: str, message: str) -> None:
    """Queue a notice for the next rendered page."""
    pending = getattr(request.state, "pending_flashes", None)
    if pending is None:
        pending = request.state.pending_flashes = []
    pending.append({"category": category, "message": message})


def consume_flashes(request: Request) -> dict[str, list[str]]:
    """Return every notice visible to this request, grouped by category.

    Consumed notices are not written back to the cookie.
    """
    messages = list(getattr(request.state, "incoming_flashes", []))
    messages.extend(getattr(request.state, "pending_flashes", []))
    request.state.incoming_flashes = []
    request.state.pending_flashes = []

    grouped: dict[str, list[str]] = {"success": [], "error": []}
    for item in messages:
        grouped.setdefault(item["category"], []).append(item["message"])
    return grouped


def _read_cookie(request: Request) -> list[dict[str, str]]:
    token = request.cookies.get(FLASH_COOKIE_NAME)
    if not token:
        return []
    try:
        payload = _signer().loads(token, max_age=FLASH_MAX_AGE)
    except ValueError:
        logger.debug("Ignoring invalid flash cookie")
        return []
    messages = payload.get("messages", [])
    return [item for item in messages if isinstance(item, dict) and "message" in item]


class FlashMiddleware(BaseHTTPMiddleware):
    """Load notices from the cookie before the request and persist new ones after.

    Incoming notices are consumed by the request they arrive with, as if a page
    had rendered them.
    """

    async def dispatch(self, request: Request, call_next):
        had_cookie = FLASH_COOKIE_NAME in request.cookies
        request.state.incoming_flashes = _read_cookie(request)
        request.state.pending_flashes = []

        response = await call_next(request)

        pending = getattr(request.state, "pending_flashes", [])
        if pending:
            response.set_cookie(
                key=FLASH_COOKIE_NAME,
                value=_signer().dumps({"messages": pending}),
                httponly=True,
                secure=get_settings().session_cookie_secure,
                samesite="lax",
                max_age=FLASH_MAX_AGE,
            )
        elif had_cookie:
            response.delete_cookie(FLASH_COOKIE_NAME)
        return response
