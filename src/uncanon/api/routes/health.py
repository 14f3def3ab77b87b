"""Health check endpoint."""

from fastapi import APIRouter, Depends

from uncanon.database import get_catalog
from uncanon.store import Catalog

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check(catalog: Catalog = Depends(get_catalog)) -> dict[str, str | int]:
    """
    Health check endpoint.

    Returns:
        Status message plus the size of each collection
    """
    return {
        "status": "ok",
        "directors": await catalog.directors.count(),
        "films": await catalog.films.count(),
    }
