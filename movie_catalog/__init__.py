"""Server-rendered movie catalog with session authentication."""

__version__ = "1.0.0"
