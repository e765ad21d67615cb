"""Per-request identity passed explicitly to gates, handlers and templates."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CurrentUser:
    id: int
    username: str


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Who is making the request, as established from the session cookie."""

    user: CurrentUser | None = None
    session_token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


ANONYMOUS = RequestContext()
