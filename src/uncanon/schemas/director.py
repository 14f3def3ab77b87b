"""Pydantic schemas for director data."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from uncanon.models.director import ALIVE_DEATH_YEAR


class FilmStub(BaseModel):
    """Minimal film reference shown alongside a director."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    image: str | None = None


class DirectorResponse(BaseModel):
    """Director response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    lex_key: str
    birth_year: int | None = None
    death_year: int | None = None
    thumbnail: dict[str, Any] | None = None
    content_urls: dict[str, Any] | None = None
    extract: str | None = None
    extract_html: str | None = None

    @field_validator("death_year")
    @classmethod
    def alive_is_null(cls, value: int | None) -> int | None:
        """The stored sentinel means no death year is recorded."""
        if value == ALIVE_DEATH_YEAR:
            return None
        return value


class DirectorWithFilm(DirectorResponse):
    """Director with the first film that references it."""

    film: FilmStub | None = None
