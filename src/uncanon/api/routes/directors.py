"""Directors API endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query

from uncanon.database import get_catalog
from uncanon.models import Director
from uncanon.schemas import DirectorWithFilm, FilmStub
from uncanon.store import Catalog, OrderBy

router = APIRouter()


def like_pattern(text: str) -> str:
    """Substring LIKE pattern matching *text* literally, escaped with a backslash."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


@router.get("/directors", response_model=list[DirectorWithFilm])
async def list_directors(
    order_by: list[str] = Query(default=[], description="Fields to sort by, e.g. lex_key"),
    order: list[Literal["asc", "desc"]] = Query(default=[], description="Direction per field"),
    name: str | None = Query(default=None, min_length=1, description="Name search string"),
    catalog: Catalog = Depends(get_catalog),
) -> list[DirectorWithFilm]:
    """
    List directors, each with the first film that references it.

    Args:
        order_by: Fields to sort by (default: id)
        order: Sort direction for each field in order_by
        name: Case-insensitive substring filter on the name
        catalog: Catalog store

    Returns:
        Directors in the requested order
    """
    where = [Director.name.ilike(like_pattern(name), escape="\\")] if name else []
    try:
        directors = await catalog.directors.find(*where, order_by=OrderBy(order_by, order))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    first_films = await catalog.first_films_by_director()
    results = []
    for director in directors:
        result = DirectorWithFilm.model_validate(director)
        film = first_films.get(director.id)
        if film:
            result.film = FilmStub.model_validate(film)
        results.append(result)
    return results


@router.get("/directors/{director_id}", response_model=DirectorWithFilm)
async def get_director(
    director_id: int,
    catalog: Catalog = Depends(get_catalog),
) -> DirectorWithFilm:
    director = await catalog.directors.find_one(Director.id == director_id)
    if director is None:
        raise HTTPException(status_code=404, detail=f"Director {director_id} not found")

    result = DirectorWithFilm.model_validate(director)
    film = (await catalog.first_films_by_director()).get(director_id)
    if film:
        result.film = FilmStub.model_validate(film)
    return result
