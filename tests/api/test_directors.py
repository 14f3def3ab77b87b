"""Tests for the directors API endpoints."""

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient


async def get(app: FastAPI, url: str, **params):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        return await client.get(url, params=params)


async def test_lists_directors_by_id(test_app: FastAPI) -> None:
    response = await get(test_app, "/api/directors")

    assert response.status_code == 200
    assert [d["id"] for d in response.json()] == [1, 2, 5, 7, 8]


async def test_orders_by_lex_key(test_app: FastAPI) -> None:
    response = await get(test_app, "/api/directors", order_by="lex_key")

    assert [d["name"] for d in response.json()] == [
        "Danièle Huillet",
        "Jean-Marie Straub",
        "Andrei Tarkovsky",
        "Agnès Varda",
        "Wong Kar-wai",
    ]


async def test_orders_descending(test_app: FastAPI) -> None:
    response = await get(test_app, "/api/directors", order_by="birth_year", order="desc")

    assert [d["birth_year"] for d in response.json()] == [1958, 1936, 1933, 1932, 1928]


async def test_unknown_order_field_is_rejected(test_app: FastAPI) -> None:
    response = await get(test_app, "/api/directors", order_by="shoe_size")

    assert response.status_code == 400


async def test_filters_by_name(test_app: FastAPI) -> None:
    response = await get(test_app, "/api/directors", name="tarkov")

    assert [d["id"] for d in response.json()] == [1]


async def test_name_filter_matches_wildcards_literally(test_app: FastAPI) -> None:
    for name in ("%", "_", "Wong%wai"):
        response = await get(test_app, "/api/directors", name=name)

        assert response.status_code == 200
        assert response.json() == []


async def test_alive_director_has_null_death_year(test_app: FastAPI) -> None:
    response = await get(test_app, "/api/directors/5")

    assert response.status_code == 200
    assert response.json()["death_year"] is None


async def test_includes_first_film_stub(test_app: FastAPI) -> None:
    response = await get(test_app, "/api/directors/1")

    data = response.json()
    assert data["death_year"] == 1986
    assert data["film"] == {"id": 1, "title": "Stalker", "image": None}


async def test_list_includes_film_stubs(test_app: FastAPI) -> None:
    response = await get(test_app, "/api/directors")

    films = {d["id"]: d["film"]["title"] for d in response.json()}
    assert films[7] == "Class Relations"
    assert films[8] == "Class Relations"


async def test_unknown_director_returns_404(test_app: FastAPI) -> None:
    response = await get(test_app, "/api/directors/999")

    assert response.status_code == 404
