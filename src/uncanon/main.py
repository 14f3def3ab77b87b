"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from uncanon.api.routes import directors, films, health
from uncanon.config import settings
from uncanon.store import Catalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: open the catalog written by the seed job
    settings.require("persistence_directory")
    catalog = Catalog(settings.persistence_directory)
    await catalog.init()
    app.state.catalog = catalog
    logger.info(f"Catalog opened from {catalog.directory}")

    yield

    # Shutdown: release database connections
    await catalog.dispose()
    logger.info("Catalog closed")


# Create FastAPI app
app = FastAPI(
    title="Uncanon API",
    description="Read-only query API for the film/director catalog",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(directors.router, prefix="/api", tags=["directors"])
app.include_router(films.router, prefix="/api", tags=["films"])
