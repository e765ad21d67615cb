"""Registration, login and logout pages."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import FormData

from movie_catalog.core.config import get_settings
from movie_catalog.core.context import RequestContext
from movie_catalog.core.dependencies import SESSION_COOKIE_NAME, get_db, get_request_context
from movie_catalog.core.gates import CATALOG_URL, LOGIN_URL
from movie_catalog.core.security import SessionSigner
from movie_catalog.core.templating import render
from movie_catalog.middleware.flash import flash
from movie_catalog.schemas import LoginRequest, UserCreate, form_errors
from movie_catalog.services.sessions import create_session, destroy_session
from movie_catalog.services.users import RegistrationError, authenticate_user, create_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

REGISTER_URL = "/register"
INVALID_CREDENTIALS = "Invalid email or password"


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def _text(form: FormData, key: str) -> str:
    """Form value as text; file parts and missing keys read as empty."""
    value = form.get(key, "")
    return value if isinstance(value, str) else ""


@router.get(REGISTER_URL, response_class=HTMLResponse)
async def register_form(request: Request, context: RequestContext = Depends(get_request_context)):
    if context.is_authenticated:
        return _redirect(CATALOG_URL)
    return render(request, context, "auth/register.html", {"title": "Register", "user": {}})


@router.post(REGISTER_URL, response_class=HTMLResponse)
async def register(
    request: Request,
    session: AsyncSession = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    form = await request.form()
    raw = {
        "username": _text(form, "username"),
        "email": _text(form, "email"),
        "password": _text(form, "password"),
        "confirm_password": _text(form, "confirm_password"),
    }
    echo = {"username": raw["username"], "email": raw["email"]}

    def rejected(errors: list[dict[str, str]]):
        return render(request, context, "auth/register.html", {"title": "Register", "errors": errors, "user": echo})

    try:
        user_in = UserCreate.model_validate(raw)
    except ValidationError as exc:
        return rejected(form_errors(exc))

    try:
        user = await create_user(session, user_in)
        await session.commit()
    except RegistrationError as exc:
        return rejected([{"field": "", "msg": str(exc)}])
    except SQLAlchemyError:
        logger.exception("Registration error")
        await session.rollback()
        flash(request, "error", "Error during registration")
        return _redirect(REGISTER_URL)

    logger.info("Registered user %s (%s)", user.id, user.username)
    flash(request, "success", "Registration successful! Please log in.")
    return _redirect(LOGIN_URL)


@router.get(LOGIN_URL, response_class=HTMLResponse)
async def login_form(request: Request, context: RequestContext = Depends(get_request_context)):
    if context.is_authenticated:
        return _redirect(CATALOG_URL)
    return render(request, context, "auth/login.html", {"title": "Login", "user": {}})


@router.post(LOGIN_URL, response_class=HTMLResponse)
async def login(
    request: Request,
    session: AsyncSession = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    form = await request.form()
    payload = LoginRequest.model_validate(
        {"email": _text(form, "email"), "password": _text(form, "password")}
    )

    try:
        user = await authenticate_user(session, payload.email, payload.password)
        record = await create_session(session, user) if user else None
        await session.commit()
    except SQLAlchemyError:
        logger.exception("Login error")
        await session.rollback()
        flash(request, "error", "Error during login")
        return _redirect(LOGIN_URL)

    if user is None or record is None:
        return render(
            request,
            context,
            "auth/login.html",
            {"title": "Login", "errors": [{"field": "", "msg": INVALID_CREDENTIALS}], "user": {"email": payload.email}},
        )

    settings = get_settings()
    flash(request, "success", "Logged in successfully!")
    response = _redirect(CATALOG_URL)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=SessionSigner().dumps({"sid": record.token}),
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        max_age=settings.session_ttl_seconds,
    )
    return response


@router.get("/logout")
async def logout(
    request: Request,
    session: AsyncSession = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    if context.session_token:
        try:
            await destroy_session(session, context.session_token)
            await session.commit()
        except SQLAlchemyError:
            logger.exception("Logout error")
            await session.rollback()
            flash(request, "error", "Error logging out")
            return _redirect(CATALOG_URL)

    response = _redirect(LOGIN_URL)
    response.delete_cookie(SESSION_COOKIE_NAME)
    return response
