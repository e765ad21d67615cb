"""Movie catalog pages and mutations."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import FormData

from movie_catalog.core.context import CurrentUser, RequestContext
from movie_catalog.core.dependencies import get_current_user, get_db, get_owned_movie, get_request_context
from movie_catalog.core.gates import CATALOG_URL, movie_url
from movie_catalog.core.templating import render
from movie_catalog.middleware.flash import flash
from movie_catalog.models.movie import Movie
from movie_catalog.schemas import SUGGESTED_GENRES, MovieIn, form_errors
from movie_catalog.services import movies as movie_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["movies"])

ADD_URL = "/movies/add"


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def _read_movie_form(form: FormData) -> dict[str, Any]:
    """Raw submitted values, kept as typed so a rejected form can echo them."""
    return {
        "name": form.get("name", ""),
        "description": form.get("description", ""),
        "year": form.get("year", ""),
        "genres": [genre for genre in form.getlist("genres") if isinstance(genre, str)],
        "rating": form.get("rating", ""),
    }


def _edit_url(movie_id: int) -> str:
    return f"{movie_url(movie_id)}/edit"


@router.get("/", response_class=HTMLResponse)
@router.get("/movies", response_class=HTMLResponse, include_in_schema=False)
async def list_movies(
    request: Request,
    session: AsyncSession = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    try:
        movies = await movie_service.list_movies(session)
    except SQLAlchemyError:
        logger.exception("Error loading movies")
        flash(request, "error", "Error loading movies")
        movies = []
    return render(request, context, "index.html", {"title": "Movie Collection", "movies": movies})


@router.get(ADD_URL, response_class=HTMLResponse)
async def add_movie_form(
    request: Request,
    context: RequestContext = Depends(get_request_context),
    _: CurrentUser = Depends(get_current_user),
):
    return render(
        request,
        context,
        "movies/add.html",
        {"title": "Add New Movie", "movie": {}, "genres": SUGGESTED_GENRES},
    )


@router.post(ADD_URL, response_class=HTMLResponse)
async def add_movie(
    request: Request,
    session: AsyncSession = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
    user: CurrentUser = Depends(get_current_user),
):
    raw = _read_movie_form(await request.form())
    try:
        data = MovieIn.model_validate(raw)
    except ValidationError as exc:
        return render(
            request,
            context,
            "movies/add.html",
            {"title": "Add New Movie", "movie": raw, "errors": form_errors(exc), "genres": SUGGESTED_GENRES},
        )

    try:
        movie = await movie_service.create_movie(session, data, owner_id=user.id)
        await session.commit()
    except SQLAlchemyError:
        logger.exception("Error saving movie")
        await session.rollback()
        flash(request, "error", "Error saving movie")
        return _redirect(ADD_URL)

    logger.info("User %s added movie %s", user.id, movie.id)
    flash(request, "success", "Movie added successfully!")
    return _redirect(CATALOG_URL)


@router.get("/movies/{movie_id:int}", response_class=HTMLResponse)
async def show_movie(
    movie_id: int,
    request: Request,
    session: AsyncSession = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
):
    try:
        movie = await movie_service.get_movie(session, movie_id)
    except SQLAlchemyError:
        logger.exception("Error loading movie %s", movie_id)
        flash(request, "error", "Error loading movie")
        return _redirect(CATALOG_URL)

    if movie is None:
        flash(request, "error", "Movie not found")
        return _redirect(CATALOG_URL)

    is_owner = context.user is not None and context.user.id == movie.created_by
    return render(request, context, "movies/show.html", {"title": movie.name, "movie": movie, "is_owner": is_owner})


@router.get("/movies/{movie_id:int}/edit", response_class=HTMLResponse)
async def edit_movie_form(
    request: Request,
    context: RequestContext = Depends(get_request_context),
    movie: Movie = Depends(get_owned_movie),
):
    return render(
        request,
        context,
        "movies/edit.html",
        {"title": "Edit Movie", "movie_id": movie.id, "movie": movie.to_form_data(), "genres": SUGGESTED_GENRES},
    )


@router.post("/movies/{movie_id:int}/edit", response_class=HTMLResponse)
async def update_movie(
    request: Request,
    session: AsyncSession = Depends(get_db),
    context: RequestContext = Depends(get_request_context),
    movie: Movie = Depends(get_owned_movie),
):
    movie_id = movie.id
    raw = _read_movie_form(await request.form())
    try:
        data = MovieIn.model_validate(raw)
    except ValidationError as exc:
        return render(
            request,
            context,
            "movies/edit.html",
            {
                "title": "Edit Movie",
                "movie_id": movie_id,
                "movie": {**movie.to_form_data(), **raw},
                "errors": form_errors(exc),
                "genres": SUGGESTED_GENRES,
            },
        )

    try:
        await movie_service.update_movie(session, movie, data)
        await session.commit()
    except SQLAlchemyError:
        logger.exception("Error updating movie %s", movie_id)
        await session.rollback()
        flash(request, "error", "Error updating movie")
        return _redirect(_edit_url(movie_id))

    flash(request, "success", "Movie updated successfully!")
    return _redirect(movie_url(movie_id))


@router.delete("/movies/{movie_id:int}")
async def delete_movie(
    request: Request,
    session: AsyncSession = Depends(get_db),
    movie: Movie = Depends(get_owned_movie),
) -> JSONResponse:
    movie_id = movie.id
    try:
        await movie_service.delete_movie(session, movie)
        await session.commit()
    except SQLAlchemyError:
        logger.exception("Error deleting movie %s", movie_id)
        await session.rollback()
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Error deleting movie"},
        )

    logger.info("Deleted movie %s", movie_id)
    flash(request, "success", "Movie deleted successfully!")
    return JSONResponse(content={"success": True})
