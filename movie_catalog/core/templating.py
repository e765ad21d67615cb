"""Jinja2 page rendering with the shared layout context."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates

from movie_catalog.core.config import get_settings
from movie_catalog.core.context import ANONYMOUS, RequestContext
from movie_catalog.middleware.flash import consume_flashes

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(
    request: Request,
    context: RequestContext | None,
    name: str,
    data: dict[str, Any] | None = None,
    status_code: int = 200,
):
    """Render ``name`` with the current user and pending notices merged into ``data``."""
    context = context or ANONYMOUS
    values: dict[str, Any] = {
        "app_name": get_settings().app_name,
        "current_user": context.user,
        "flashes": consume_flashes(request),
        "errors": [],
    }
    values.update(data or {})
    return templates.TemplateResponse(request, name, values, status_code=status_code)
