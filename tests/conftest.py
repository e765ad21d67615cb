"""Pytest configuration and fixtures for the movie catalog."""

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from movie_catalog.core.dependencies import get_db
from movie_catalog.db.base import Base
from movie_catalog.main import app
from movie_catalog.models import Movie, User
from movie_catalog.schemas import MovieIn, UserCreate
from movie_catalog.services.movies import create_movie
from movie_catalog.services.users import create_user

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

DEFAULT_PASSWORD = "secret1"

VALID_MOVIE_FORM = {
    "name": "Metropolis",
    "description": "A futuristic city sharply divided between workers and planners.",
    "year": "1927",
    "genres": ["Drama", "Sci-Fi"],
    "rating": "8.3",
}


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh in-memory database per test."""
    # SQLite in-memory requires StaticPool to keep the connection alive
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Database session for tests that need direct DB access."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def make_client(session_factory) -> AsyncGenerator[Callable[..., AsyncClient], None]:
    """Build independent clients (separate cookie jars) bound to the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    clients: list[AsyncClient] = []

    def factory(raise_app_exceptions: bool = True) -> AsyncClient:
        ac = AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions),
            base_url="http://test",
        )
        clients.append(ac)
        return ac

    yield factory

    for ac in clients:
        await ac.aclose()
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(make_client) -> AsyncClient:
    """Anonymous client."""
    return make_client()


@pytest_asyncio.fixture
async def add_user(session_factory) -> Callable[..., Awaitable[User]]:
    """Insert a user directly through the service layer."""

    async def _add(username: str, email: str, password: str = DEFAULT_PASSWORD) -> User:
        async with session_factory() as session:
            user = await create_user(
                session,
                UserCreate(username=username, email=email, password=password, confirm_password=password),
            )
            await session.commit()
            return user

    return _add


@pytest_asyncio.fixture
async def add_movie(session_factory) -> Callable[..., Awaitable[Movie]]:
    """Insert a movie owned by ``owner_id``."""

    async def _add(owner_id: int, **overrides) -> Movie:
        data = MovieIn.model_validate({**VALID_MOVIE_FORM, **overrides})
        async with session_factory() as session:
            movie = await create_movie(session, data, owner_id=owner_id)
            await session.commit()
            return movie

    return _add


@pytest_asyncio.fixture
async def fetch_movie(session_factory) -> Callable[[int], Awaitable[Movie | None]]:
    async def _fetch(movie_id: int) -> Movie | None:
        async with session_factory() as session:
            return await session.get(Movie, movie_id)

    return _fetch


@pytest_asyncio.fixture
async def count_movies(session_factory) -> Callable[[], Awaitable[int]]:
    async def _count() -> int:
        async with session_factory() as session:
            return (await session.execute(select(func.count(Movie.id)))).scalar_one()

    return _count


async def login(client: AsyncClient, email: str, password: str = DEFAULT_PASSWORD):
    """Log ``client`` in; its cookie jar keeps the session afterwards."""
    response = await client.post("/login", data={"email": email, "password": password})
    assert response.status_code == 303, response.text
    assert response.headers["location"] == "/"
    return response
