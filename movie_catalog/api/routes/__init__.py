"""Route modules for the movie catalog."""
from . import auth, movies

__all__ = ["auth", "movies"]
