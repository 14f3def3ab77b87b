"""Catalog store: document-style collections over the SQLite catalog."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Generic, Literal, TypeVar

from sqlalchemy import ColumnElement, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from uncanon.database import catalog_files, create_engine, create_session_factory
from uncanon.models import Base, Director, Film

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


@dataclass
class OrderBy:
    """
    Sort order: ``fields[i]`` is sorted by ``order[i]``.

    Fields without a matching direction sort ascending.
    """

    fields: list[str] = field(default_factory=list)
    order: list[Literal["asc", "desc"]] = field(default_factory=list)


class Collection(Generic[ModelT]):
    """
    One entity collection of the catalog.

    Exposes the small set of verbs the seed and merge pipeline rely on.
    Predicates are SQLAlchemy column expressions, e.g.
    ``films.find(Film.year > 1950)``.
    """

    def __init__(self, model: type[ModelT], session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.model = model
        self.session_factory = session_factory

    async def insert_many(self, rows: Iterable[dict[str, Any]]) -> int:
        """Insert all rows in one transaction and return how many were inserted."""
        rows = list(rows)
        if not rows:
            return 0
        async with self.session_factory() as session:
            await session.execute(insert(self.model), rows)
            await session.commit()
        return len(rows)

    async def count(self, *where: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(self.model).where(*where)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one()

    async def find(self, *where: ColumnElement[bool], order_by: OrderBy | None = None) -> list[ModelT]:
        """
        Find all entities matching every predicate.

        Args:
            where: Column predicates (all must hold)
            order_by: Optional sort order

        Returns:
            Matching entities, sorted by ``order_by`` or by ID
        """
        stmt = select(self.model).where(*where).order_by(*self.order_clauses(order_by))
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def find_one(self, *where: ColumnElement[bool]) -> ModelT | None:
        stmt = select(self.model).where(*where).order_by(self.model.id).limit(1)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    async def update(self, *where: ColumnElement[bool], values: dict[str, Any]) -> int:
        """
        Set only the given fields on every matching entity.

        Returns:
            Number of entities matched
        """
        if not values:
            return 0
        stmt = update(self.model).where(*where).values(**values)
        async with self.session_factory() as session:
            result = await session.execute(stmt)
            await session.commit()
            return result.rowcount

    def order_clauses(self, order_by: OrderBy | None) -> list[Any]:
        """
        Translate an OrderBy into SQLAlchemy ordering clauses.

        Raises:
            ValueError: if a field is not a column of the collection
        """
        columns = self.model.__table__.columns
        if not order_by or not order_by.fields:
            return [columns["id"]]

        clauses = []
        for i, name in enumerate(order_by.fields):
            if name not in columns:
                raise ValueError(f"Cannot order {self.model.__tablename__} by unknown field {name!r}")
            direction = order_by.order[i] if i < len(order_by.order) else "asc"
            column = columns[name]
            clauses.append(column.desc() if direction == "desc" else column.asc())
        # ID as final tie-breaker keeps ordering stable
        clauses.append(columns["id"])
        return clauses


class Catalog:
    """
    The film/director catalog persisted in a single SQLite file.

    Args:
        directory: Persistence directory holding the catalog database
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        self._open()

    def _open(self) -> None:
        self.engine = create_engine(self.directory)
        self.session_factory = create_session_factory(self.engine)
        self.directors: Collection[Director] = Collection(Director, self.session_factory)
        self.films: Collection[Film] = Collection(Film, self.session_factory)

    async def init(self) -> None:
        """Create the catalog tables if they do not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    async def delete_all_files(self) -> None:
        """
        Delete the catalog database files.

        Failures are logged and otherwise ignored. The catalog is reopened
        afterwards, so ``init()`` must be called before it is used again.
        """
        await self.engine.dispose()
        for path in catalog_files(self.directory):
            if not path.exists():
                continue
            try:
                path.unlink()
            except OSError as e:
                logger.error(f"Could not delete {path}: {e}")
        self._open()

    async def insert_seed(self, directors: Sequence[dict[str, Any]], films: Sequence[dict[str, Any]]) -> None:
        """
        Insert seed directors and films in a single transaction.

        Either both collections are loaded or neither is.
        """
        async with self.session_factory() as session:
            if directors:
                await session.execute(insert(Director), list(directors))
            if films:
                await session.execute(insert(Film), list(films))
            await session.commit()

    async def populate_directors(self, films: Sequence[Film]) -> dict[int, list[Director]]:
        """
        Join each film's director IDs against the director collection.

        Unknown IDs are dropped; the film's own ordering is kept.

        Returns:
            Joined directors keyed by film ID
        """
        wanted = {director_id for film in films for director_id in film.directors}
        if not wanted:
            return {film.id: [] for film in films}

        directors = await self.directors.find(Director.id.in_(wanted))
        by_id = {director.id: director for director in directors}
        return {
            film.id: [by_id[director_id] for director_id in film.directors if director_id in by_id]
            for film in films
        }

    async def first_films_by_director(self) -> dict[int, Film]:
        """Lowest-ID film referencing each director, keyed by director ID."""
        first: dict[int, Film] = {}
        for film in await self.films.find():
            for director_id in film.directors:
                first.setdefault(director_id, film)
        return first
