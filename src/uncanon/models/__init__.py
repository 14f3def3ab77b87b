"""SQLAlchemy ORM models."""

from uncanon.models.base import Base
from uncanon.models.director import ALIVE_DEATH_YEAR, Director
from uncanon.models.film import Film

__all__ = ["ALIVE_DEATH_YEAR", "Base", "Director", "Film"]
