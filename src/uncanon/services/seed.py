"""Seed the catalog from CSV files and run the requested enrichment phases."""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from uncanon.config import settings
from uncanon.models import ALIVE_DEATH_YEAR
from uncanon.services.merge import MergeEngine
from uncanon.services.snapshots import SnapshotStore
from uncanon.store import Catalog
from uncanon.utils.text import lex_key, parse_id_list

logger = logging.getLogger(__name__)

DIRECTORS_FILE = "directors.csv"
FILMS_FILE = "films.csv"


@dataclass
class SeedOptions:
    """What a seed run should do after loading the base data."""

    reset: bool = False
    do_merge_imdb: bool = False
    do_fetch_imdb: bool = False
    do_merge_wikipedia: bool = False
    do_fetch_wikipedia: bool = False


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class DirectorSeedRow(BaseModel):
    """One row of directors.csv."""

    id: int = Field(validation_alias=AliasChoices("_id", "id"))
    name: str = Field(min_length=1)
    lex_key: str | None = Field(default=None, validation_alias=AliasChoices("lexKey", "lex_key"))
    birth_year: int | None = Field(default=None, validation_alias=AliasChoices("birthYear", "birth_year"))
    death_year: int | None = Field(default=None, validation_alias=AliasChoices("deathYear", "death_year"))

    @field_validator("lex_key", "birth_year", mode="before")
    @classmethod
    def blank_is_missing(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("death_year", mode="before")
    @classmethod
    def zero_is_missing(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if value in (0, "0"):
            return None
        return value

    @field_validator("death_year")
    @classmethod
    def below_sentinel(cls, value: int | None) -> int | None:
        if value is not None and value >= ALIVE_DEATH_YEAR:
            raise ValueError(f"death year {value} is not a plausible year")
        return value

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "lex_key": self.lex_key or lex_key(self.name),
            "birth_year": self.birth_year,
            "death_year": self.death_year if self.death_year is not None else ALIVE_DEATH_YEAR,
        }


class FilmSeedRow(BaseModel):
    """One row of films.csv."""

    id: int = Field(validation_alias=AliasChoices("_id", "id"))
    title: str = Field(min_length=1)
    year: int | None = None
    directors: list[int] = Field(default_factory=list)

    @field_validator("year", mode="before")
    @classmethod
    def blank_is_missing(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("directors", mode="before")
    @classmethod
    def parse_directors(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return parse_id_list(value)
        return value

    def to_row(self) -> dict[str, Any]:
        return self.model_dump()


def load_rows(path: Path, row_model: type[DirectorSeedRow] | type[FilmSeedRow]) -> list[dict[str, Any]]:
    """
    Read and validate a seed CSV file.

    Invalid rows, and rows repeating an earlier ID, are logged and skipped.

    Args:
        path: CSV file with a header row
        row_model: Model validating one row

    Returns:
        Rows ready for insertion
    """
    if not path.exists():
        raise FileNotFoundError(f"Seed file not found: {path}")

    rows = []
    seen: set[int] = set()
    with open(path, newline="", encoding="utf-8") as f:
        for line_num, record in enumerate(csv.DictReader(f), start=2):
            try:
                row = row_model.model_validate(record).to_row()
            except ValidationError as e:
                logger.warning(f"Skipping invalid row at {path.name}:{line_num}: {e}")
                continue
            if row["id"] in seen:
                logger.warning(f"Skipping duplicate id {row['id']} at {path.name}:{line_num}")
                continue
            seen.add(row["id"])
            rows.append(row)
    return rows


def load_directors(directory: Path) -> list[dict[str, Any]]:
    return load_rows(directory / DIRECTORS_FILE, DirectorSeedRow)


def load_films(directory: Path) -> list[dict[str, Any]]:
    return load_rows(directory / FILMS_FILE, FilmSeedRow)


async def seed(
    catalog: Catalog,
    options: SeedOptions | None = None,
    engine: MergeEngine | None = None,
    seed_directory: str | Path | None = None,
) -> None:
    """
    Load the seed data into an empty catalog, then run enrichment phases.

    A catalog that already holds entities is never re-seeded; only the
    requested enrichment phases run. Both seed files are read before
    anything is inserted, and a missing file leaves the catalog empty.

    Args:
        catalog: Catalog to seed
        options: Reset and enrichment flags
        engine: Merge engine (created on demand if not provided)
        seed_directory: Directory with the seed CSVs (uses settings if not provided)
    """
    options = options or SeedOptions()

    if options.reset:
        await catalog.delete_all_files()
        logger.info("Existing catalog files deleted.")
    await catalog.init()

    existing = await catalog.directors.count() + await catalog.films.count()
    if existing == 0:
        directory = Path(seed_directory or settings.seed_directory)
        try:
            directors = load_directors(directory)
            films = load_films(directory)
        except FileNotFoundError as e:
            logger.error(f"Not inserting: {e}")
        else:
            await catalog.insert_seed(directors, films)
            logger.info(f"Inserted {len(directors)} directors and {len(films)} films.")
    else:
        logger.info(f"Not inserting: found {existing} existing entities.")

    if options.do_fetch_imdb and not options.do_merge_imdb:
        logger.info("IMDb fetch requested without merge; skipping")
    if options.do_fetch_wikipedia and not options.do_merge_wikipedia:
        logger.info("Wikipedia fetch requested without merge; skipping")
    if not (options.do_merge_imdb or options.do_merge_wikipedia):
        return

    engine = engine or MergeEngine(catalog, SnapshotStore(catalog.directory))
    if options.do_merge_imdb:
        await engine.merge_imdb(do_fetch=options.do_fetch_imdb)
    if options.do_merge_wikipedia:
        await engine.merge_wikipedia(do_fetch=options.do_fetch_wikipedia)
