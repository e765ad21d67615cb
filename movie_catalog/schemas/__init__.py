"""Form schemas and helpers for reporting their errors back to templates."""
from __future__ import annotations

from pydantic import ValidationError

from .movie import SUGGESTED_GENRES, MovieIn
from .user import LoginRequest, UserCreate


def form_errors(exc: ValidationError) -> list[dict[str, str]]:
    """Flatten a ValidationError into ``{"field", "msg"}`` items for templates."""
    return [
        {"field": str(error["loc"][0]) if error.get("loc") else "", "msg": error["msg"]}
        for error in exc.errors()
    ]


__all__ = ["LoginRequest", "MovieIn", "SUGGESTED_GENRES", "UserCreate", "form_errors"]
