"""Tests for the generic 404 and 500 pages."""

from movie_catalog.core.dependencies import get_db
from movie_catalog.main import app


async def test_unknown_route_renders_404_page(client):
    response = await client.get("/no/such/page")

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("text/html")
    assert "Page Not Found" in response.text


async def test_non_numeric_movie_id_is_404(client):
    response = await client.get("/movies/not-a-number")
    assert response.status_code == 404
    assert "Page Not Found" in response.text


async def test_unhandled_fault_renders_generic_500(make_client):
    ac = make_client(raise_app_exceptions=False)

    async def broken_db():
        raise RuntimeError("connection refused by db-internal-01")
        yield  # pragma: no cover

    app.dependency_overrides[get_db] = broken_db
    response = await ac.get("/")

    assert response.status_code == 500
    assert "Server Error" in response.text
    assert "db-internal-01" not in response.text


async def test_static_assets_are_served(client):
    response = await client.get("/static/js/main.js")
    assert response.status_code == 200
    assert "data-delete-movie" in response.text
