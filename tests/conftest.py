"""Shared test fixtures."""

from typing import Any

import pytest
from fastapi import FastAPI

from uncanon.api.routes import directors, films, health
from uncanon.models import ALIVE_DEATH_YEAR
from uncanon.services.snapshots import SnapshotStore
from uncanon.store import Catalog

DIRECTOR_ROWS: list[dict[str, Any]] = [
    {"id": 1, "name": "Andrei Tarkovsky", "lex_key": "tarkovsky andrei", "birth_year": 1932, "death_year": 1986},
    {"id": 2, "name": "Agnès Varda", "lex_key": "varda agnes", "birth_year": 1928, "death_year": 2019},
    {"id": 5, "name": "Wong Kar-wai", "lex_key": "wong kar-wai", "birth_year": 1958, "death_year": ALIVE_DEATH_YEAR},
    {"id": 7, "name": "Jean-Marie Straub", "lex_key": "straub jean-marie", "birth_year": 1933, "death_year": 2022},
    {"id": 8, "name": "Danièle Huillet", "lex_key": "huillet daniele", "birth_year": 1936, "death_year": 2006},
]

FILM_ROWS: list[dict[str, Any]] = [
    {"id": 1, "title": "Stalker", "year": 1979, "directors": [1]},
    {"id": 2, "title": "Cléo from 5 to 7", "year": 1962, "directors": [2]},
    {"id": 5, "title": "In the Mood for Love", "year": 2000, "directors": [5]},
    {"id": 7, "title": "Class Relations", "year": 1984, "directors": [7, 8]},
    {"id": 10, "title": "Mirror", "year": 1975, "directors": [1]},
]


@pytest.fixture
async def catalog(tmp_path) -> Catalog:
    """Empty catalog backed by a SQLite file in a temporary directory."""
    catalog = Catalog(tmp_path / "store")
    await catalog.init()
    yield catalog
    await catalog.dispose()


@pytest.fixture
async def populated_catalog(catalog: Catalog) -> Catalog:
    await catalog.directors.insert_many(DIRECTOR_ROWS)
    await catalog.films.insert_many(FILM_ROWS)
    return catalog


@pytest.fixture
def snapshots(tmp_path) -> SnapshotStore:
    return SnapshotStore(tmp_path / "store")


@pytest.fixture
def test_app(populated_catalog: Catalog) -> FastAPI:
    """Minimal FastAPI app without the startup lifespan, for API tests."""
    app = FastAPI()
    app.state.catalog = populated_catalog
    app.include_router(health.router)
    app.include_router(directors.router, prefix="/api")
    app.include_router(films.router, prefix="/api")
    return app
