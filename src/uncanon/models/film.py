"""Film model for storing film metadata."""

from typing import Any

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from uncanon.models.base import Base


class Film(Base):
    """
    Film model.

    ``directors`` holds raw director IDs. Joined director records are
    produced at read time and never written back.
    """

    __tablename__ = "films"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    directors: Mapped[list[int]] = mapped_column(nullable=False, default=list)

    # IMDb metadata
    imdb_id: Mapped[str | None] = mapped_column(String(20), nullable=True, index=True)
    original_title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    plot: Mapped[str | None] = mapped_column(Text, nullable=True)
    directors_text: Mapped[str | None] = mapped_column(String(500), nullable=True)
    writers: Mapped[str | None] = mapped_column(String(500), nullable=True)
    stars: Mapped[str | None] = mapped_column(String(500), nullable=True)
    wikipedia: Mapped[dict[str, Any] | None] = mapped_column(nullable=True)

    def __repr__(self) -> str:
        return f"<Film(id={self.id!r}, title={self.title!r}, year={self.year})>"
