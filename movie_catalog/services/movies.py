"""Service layer for movie persistence."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from movie_catalog.models.movie import Movie
from movie_catalog.schemas.movie import MovieIn

# Largest value a signed 64-bit INTEGER primary key can hold.
MAX_MOVIE_ID = 2**63 - 1


async def list_movies(session: AsyncSession) -> list[Movie]:
    result = await session.execute(
        select(Movie)
        .options(selectinload(Movie.owner))
        .order_by(Movie.created_at.desc(), Movie.id.desc())
    )
    return list(result.scalars().all())


async def get_movie(session: AsyncSession, movie_id: int) -> Movie | None:
    if not 0 < movie_id <= MAX_MOVIE_ID:
        return None
    result = await session.execute(
        select(Movie).options(selectinload(Movie.owner)).where(Movie.id == movie_id)
    )
    return result.scalar_one_or_none()


async def create_movie(session: AsyncSession, data: MovieIn, owner_id: int) -> Movie:
    movie = Movie(
        name=data.name,
        description=data.description,
        year=data.year,
        genres=data.genres,
        rating=data.rating,
        created_by=owner_id,
    )
    session.add(movie)
    await session.flush()
    return movie


async def update_movie(session: AsyncSession, movie: Movie, data: MovieIn) -> Movie:
    movie.name = data.name
    movie.description = data.description
    movie.year = data.year
    movie.genres = data.genres
    movie.rating = data.rating
    await session.flush()
    return movie


async def delete_movie(session: AsyncSession, movie: Movie) -> None:
    await session.delete(movie)
    await session.flush()
