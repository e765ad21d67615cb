"""FastAPI application entrypoint."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from movie_catalog.api import api_router
from movie_catalog.core.config import get_settings
from movie_catalog.core.gates import GateDenied
from movie_catalog.db.session import create_tables, dispose_engine
from movie_catalog.middleware.flash import FlashMiddleware, flash
from movie_catalog.services.scheduler import get_scheduler, schedule_session_purge_job, start_scheduler

logger = logging.getLogger(__name__)

settings = get_settings()

STATIC_DIR = Path(__file__).resolve().parent / "static"

SERVER_ERROR_PAGE = """<html>
<head><title>Server Error</title></head>
<body style="font-family: Arial; padding: 20px;">
    <h1>Server Error</h1>
    <p>Something went wrong! Please try again.</p>
    <a href="/">Go back to home page</a>
</body>
</html>"""

NOT_FOUND_PAGE = """<html>
<head><title>Page Not Found</title></head>
<body style="font-family: Arial; padding: 20px;">
    <h1>Page Not Found</h1>
    <p>The page you are looking for does not exist.</p>
    <a href="/">Go back to home page</a>
</body>
</html>"""


@asynccontextmanager
async def lifespan(_: FastAPI):
    await create_tables()
    start_scheduler()
    schedule_session_purge_job()

    try:
        yield
    finally:
        scheduler = get_scheduler()
        if scheduler.running:
            scheduler.shutdown(wait=False)
        await dispose_engine()


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(FlashMiddleware)

app.include_router(api_router)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


def _wants_json(request: Request) -> bool:
    return request.method == "DELETE" or "application/json" in request.headers.get("accept", "")


@app.exception_handler(GateDenied)
async def gate_denied_handler(request: Request, exc: GateDenied):
    denial = exc.denial
    if _wants_json(request):
        return JSONResponse(
            status_code=denial.reason.status_code,
            content={"success": False, "error": denial.message},
        )
    flash(request, "error", denial.message)
    return RedirectResponse(url=denial.redirect_to, status_code=status.HTTP_303_SEE_OTHER)


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return HTMLResponse(NOT_FOUND_PAGE, status_code=status.HTTP_404_NOT_FOUND)
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
async def server_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return HTMLResponse(SERVER_ERROR_PAGE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
