"""SQLAlchemy models exposed for metadata creation and imports."""
from .movie import Movie
from .session import SessionRecord
from .user import User

__all__ = ["User", "Movie", "SessionRecord"]
