"""Pydantic schemas for API responses and provider payloads."""

from uncanon.schemas.director import DirectorResponse, DirectorWithFilm, FilmStub
from uncanon.schemas.film import FilmBase, FilmExpanded, FilmRef

__all__ = [
    "DirectorResponse",
    "DirectorWithFilm",
    "FilmBase",
    "FilmExpanded",
    "FilmRef",
    "FilmStub",
]
