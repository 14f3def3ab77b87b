"""Pydantic schemas for film data."""

from typing import Any

from pydantic import BaseModel, ConfigDict

from uncanon.models import Director, Film
from uncanon.schemas.director import DirectorResponse


class FilmBase(BaseModel):
    """Base film schema with common fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    year: int | None = None
    imdb_id: str | None = None
    original_title: str | None = None
    image: str | None = None
    plot: str | None = None
    directors_text: str | None = None
    writers: str | None = None
    stars: str | None = None
    wikipedia: dict[str, Any] | None = None


class FilmRef(FilmBase):
    """Film as stored: directors are raw director IDs."""

    directors: list[int]


class FilmExpanded(FilmBase):
    """Film with its director IDs joined into full director records."""

    directors: list[DirectorResponse]

    @classmethod
    def from_join(cls, film: Film, directors: list[Director]) -> "FilmExpanded":
        data = FilmRef.model_validate(film).model_dump(exclude={"directors"})
        return cls(
            **data,
            directors=[DirectorResponse.model_validate(d) for d in directors],
        )
