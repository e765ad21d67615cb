"""Pydantic schemas for movie forms."""
from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_core import PydanticCustomError

MIN_RELEASE_YEAR = 1888  # first surviving motion picture
MAX_GENRES = 5
MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

SUGGESTED_GENRES = [
    "Action",
    "Adventure",
    "Comedy",
    "Drama",
    "Fantasy",
    "Horror",
    "Romance",
    "Sci-Fi",
    "Thriller",
]


def max_release_year() -> int:
    return datetime.now().year + 5


def _invalid(message: str) -> PydanticCustomError:
    return PydanticCustomError("movie_form", message)


def _required_text(value: Any, max_length: int, missing: str, too_long: str) -> str:
    text = "" if value is None else str(value).strip()
    if not text:
        raise _invalid(missing)
    if len(text) > max_length:
        raise _invalid(too_long)
    return text


class MovieIn(BaseModel):
    """Validated movie fields submitted through the add and edit forms."""

    model_config = ConfigDict(validate_default=True)

    name: str = ""
    description: str = ""
    year: int = 0
    genres: list[str] = []
    rating: float = 0.0

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, value: Any) -> str:
        return _required_text(
            value, MAX_NAME_LENGTH, "Movie name is required", "Name cannot exceed 100 characters"
        )

    @field_validator("description", mode="before")
    @classmethod
    def _check_description(cls, value: Any) -> str:
        return _required_text(
            value,
            MAX_DESCRIPTION_LENGTH,
            "Description is required",
            "Description cannot exceed 500 characters",
        )

    @field_validator("year", mode="before")
    @classmethod
    def _check_year(cls, value: Any) -> int:
        if isinstance(value, bool):
            raise _invalid("Please enter a valid year")
        text = str(value).strip()
        if not _INTEGER_RE.fullmatch(text):
            raise _invalid("Please enter a valid year")
        year = int(text)
        if not MIN_RELEASE_YEAR <= year <= max_release_year():
            raise _invalid("Please enter a valid year")
        return year

    @field_validator("genres", mode="before")
    @classmethod
    def _check_genres(cls, value: Any) -> list[str]:
        if value is None:
            value = []
        elif isinstance(value, str):
            value = [value]
        genres = [str(item).strip() for item in value if str(item).strip()]
        if not genres:
            raise _invalid("At least one genre is required")
        if len(genres) > MAX_GENRES:
            raise _invalid("Must have 1-5 genres")
        return genres

    @field_validator("rating", mode="before")
    @classmethod
    def _check_rating(cls, value: Any) -> float:
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0.0
        if isinstance(value, bool):
            raise _invalid("Rating must be between 0 and 10")
        try:
            rating = float(value)
        except (TypeError, ValueError):
            raise _invalid("Rating must be between 0 and 10") from None
        if not math.isfinite(rating) or not 0 <= rating <= 10:
            raise _invalid("Rating must be between 0 and 10")
        return rating
