"""Films API endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from uncanon.database import get_catalog
from uncanon.models import Film
from uncanon.schemas import FilmExpanded
from uncanon.store import Catalog, OrderBy

router = APIRouter()


@router.get("/films", response_model=list[FilmExpanded])
async def list_films(
    order_by: list[str] = Query(default=[], description="Fields to sort by, e.g. year"),
    order: list[Literal["asc", "desc"]] = Query(default=[], description="Direction per field"),
    year_from: int | None = Query(default=None, description="Earliest release year"),
    year_to: int | None = Query(default=None, description="Latest release year"),
    director_id: int | None = Query(default=None, description="Only films by this director"),
    catalog: Catalog = Depends(get_catalog),
) -> list[FilmExpanded]:
    """
    List films with their directors joined in.

    Returns films matching every given filter, in the requested order.
    """
    where = []
    if year_from is not None:
        where.append(Film.year >= year_from)
    if year_to is not None:
        where.append(Film.year <= year_to)

    try:
        films = await catalog.films.find(*where, order_by=OrderBy(order_by, order))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    # The director list is a JSON column, so this filter runs here
    if director_id is not None:
        films = [film for film in films if director_id in film.directors]

    joined = await catalog.populate_directors(films)
    return [FilmExpanded.from_join(film, joined[film.id]) for film in films]


@router.get("/films/{film_id}", response_model=FilmExpanded)
async def get_film(
    film_id: int,
    catalog: Catalog = Depends(get_catalog),
) -> FilmExpanded:
    film = await catalog.films.find_one(Film.id == film_id)
    if film is None:
        raise HTTPException(status_code=404, detail=f"Film {film_id} not found")

    joined = await catalog.populate_directors([film])
    return FilmExpanded.from_join(film, joined[film.id])
