"""Database engine and session management."""

from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

if TYPE_CHECKING:
    from uncanon.store import Catalog

CATALOG_FILENAME = "catalog.db"

# SQLite keeps these next to the main file while a transaction is open
JOURNAL_SUFFIXES = ("-journal", "-wal", "-shm")


def catalog_path(directory: str | Path) -> Path:
    """Location of the catalog database inside the persistence directory."""
    return Path(directory) / CATALOG_FILENAME


def catalog_files(directory: str | Path) -> list[Path]:
    """All files SQLite may create for the catalog database."""
    main = catalog_path(directory)
    return [main] + [main.with_name(main.name + suffix) for suffix in JOURNAL_SUFFIXES]


def create_engine(directory: str | Path) -> AsyncEngine:
    """
    Create an async engine for the catalog stored in *directory*.

    Args:
        directory: Persistence directory (created if missing)

    Returns:
        Async SQLAlchemy engine using the aiosqlite driver
    """
    path = catalog_path(directory)
    path.parent.mkdir(parents=True, exist_ok=True)
    return create_async_engine(
        f"sqlite+aiosqlite:///{path}",
        echo=False,  # Set to True for SQL query logging
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def get_catalog(request: Request) -> "Catalog":
    """
    Dependency for FastAPI to provide the catalog opened at startup.

    Usage:
        @router.get("/endpoint")
        async def endpoint(catalog: Catalog = Depends(get_catalog)):
            # Use catalog here
    """
    return request.app.state.catalog
