"""API router aggregator."""
from fastapi import APIRouter

from movie_catalog.api.routes import auth, movies

api_router = APIRouter()
api_router.include_router(movies.router)
api_router.include_router(auth.router)

__all__ = ["api_router"]
