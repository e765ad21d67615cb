"""Tests for movie form validation bounds."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from movie_catalog.schemas import MovieIn, form_errors

BASE = {
    "name": "Alien",
    "description": "A crew meets a hostile lifeform.",
    "year": "1979",
    "genres": ["Horror", "Sci-Fi"],
    "rating": "8.5",
}


def _errors(**overrides):
    with pytest.raises(ValidationError) as exc_info:
        MovieIn.model_validate({**BASE, **overrides})
    return form_errors(exc_info.value)


def test_valid_form_is_coerced():
    movie = MovieIn.model_validate(BASE)
    assert movie.year == 1979
    assert movie.rating == 8.5
    assert movie.genres == ["Horror", "Sci-Fi"]


def test_text_fields_are_trimmed():
    movie = MovieIn.model_validate({**BASE, "name": "  Alien  ", "description": " Space. "})
    assert movie.name == "Alien"
    assert movie.description == "Space."


@pytest.mark.parametrize("name, message", [
    ("", "Movie name is required"),
    ("   ", "Movie name is required"),
    ("x" * 101, "Name cannot exceed 100 characters"),
])
def test_name_bounds(name, message):
    assert _errors(name=name) == [{"field": "name", "msg": message}]


def test_name_at_limit_is_accepted():
    assert MovieIn.model_validate({**BASE, "name": "x" * 100}).name == "x" * 100


@pytest.mark.parametrize("description, message", [
    ("", "Description is required"),
    ("d" * 501, "Description cannot exceed 500 characters"),
])
def test_description_bounds(description, message):
    assert _errors(description=description) == [{"field": "description", "msg": message}]


@pytest.mark.parametrize("year", [
    "1700", "1887", str(datetime.now().year + 6), "abc", "", "1999.5", "1_999", "１９９９", "0x7cf",
])
def test_year_out_of_range_rejected(year):
    assert _errors(year=year) == [{"field": "year", "msg": "Please enter a valid year"}]


@pytest.mark.parametrize("year", ["1888", str(datetime.now().year + 5), " 1999 ", "+1999", 1999])
def test_year_bounds_inclusive(year):
    assert MovieIn.model_validate({**BASE, "year": year}).year == int(year)


def test_no_genres_rejected():
    assert _errors(genres=[]) == [{"field": "genres", "msg": "At least one genre is required"}]


def test_blank_genres_do_not_count():
    assert _errors(genres=["", "  "]) == [{"field": "genres", "msg": "At least one genre is required"}]


def test_too_many_genres_rejected():
    genres = ["Action", "Comedy", "Drama", "Horror", "Romance", "Thriller"]
    assert _errors(genres=genres) == [{"field": "genres", "msg": "Must have 1-5 genres"}]


def test_single_genre_string_accepted():
    assert MovieIn.model_validate({**BASE, "genres": "Drama"}).genres == ["Drama"]


@pytest.mark.parametrize("rating", ["-0.1", "10.5", "nan", "inf", "great"])
def test_rating_out_of_range_rejected(rating):
    assert _errors(rating=rating) == [{"field": "rating", "msg": "Rating must be between 0 and 10"}]


def test_rating_defaults_to_zero():
    assert MovieIn.model_validate({**BASE, "rating": ""}).rating == 0.0
    payload = {key: value for key, value in BASE.items() if key != "rating"}
    assert MovieIn.model_validate(payload).rating == 0.0


def test_all_errors_reported_together():
    errors = _errors(name="", year="1700", genres=[])
    assert {error["field"] for error in errors} == {"name", "year", "genres"}
