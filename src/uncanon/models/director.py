"""Director model."""

from typing import Any

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from uncanon.models.base import Base

# Stored death year for directors with no recorded death. Existing seed data
# uses the max positive 32-bit integer, which can never be a real year.
ALIVE_DEATH_YEAR = 0x7FFFFFFF


class Director(Base):
    """
    Director model.

    Created from seed data; summary fields are filled in by the
    Wikipedia enrichment phase.
    """

    __tablename__ = "directors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    lex_key: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    birth_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    death_year: Mapped[int] = mapped_column(Integer, nullable=False, default=ALIVE_DEATH_YEAR)

    # Wikipedia summary
    thumbnail: Mapped[dict[str, Any] | None] = mapped_column(nullable=True)
    content_urls: Mapped[dict[str, Any] | None] = mapped_column(nullable=True)
    extract: Mapped[str | None] = mapped_column(Text, nullable=True)
    extract_html: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Director(id={self.id!r}, name={self.name!r})>"
