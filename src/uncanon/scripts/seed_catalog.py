"""Seed the catalog from CSV files and optionally enrich it from IMDb and Wikipedia."""

import argparse
import asyncio
import logging
import sys

from uncanon.config import ConfigurationError, settings
from uncanon.services.seed import SeedOptions, seed
from uncanon.store import Catalog

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
logger = logging.getLogger(__name__)


def required_settings(options: SeedOptions) -> list[str]:
    """Settings the requested run cannot do without."""
    names = ["persistence_directory"]
    if options.do_merge_imdb:
        names += ["imdb_base_url", "imdb_api_key"]
    if options.do_merge_wikipedia:
        names.append("wikipedia_base_url")
    return names


async def run(options: SeedOptions, seed_directory: str | None) -> None:
    catalog = Catalog(settings.persistence_directory)
    try:
        await seed(catalog, options, seed_directory=seed_directory)
    finally:
        await catalog.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Seed the film catalog and run enrichment phases."
    )
    parser.add_argument("--reset", action="store_true", help="Delete the catalog files first")
    parser.add_argument("--merge-imdb", action="store_true", help="Apply IMDb snapshots")
    parser.add_argument(
        "--fetch-imdb",
        action="store_true",
        help="Re-fetch IMDb data before applying (needs --merge-imdb)",
    )
    parser.add_argument("--merge-wikipedia", action="store_true", help="Apply Wikipedia snapshots")
    parser.add_argument(
        "--fetch-wikipedia",
        action="store_true",
        help="Re-fetch Wikipedia data before applying (needs --merge-wikipedia)",
    )
    parser.add_argument(
        "--seed-dir",
        default=None,
        metavar="DIR",
        help=f"Directory holding the seed CSVs (default: {settings.seed_directory})",
    )
    args = parser.parse_args()

    options = SeedOptions(
        reset=args.reset,
        do_merge_imdb=args.merge_imdb,
        do_fetch_imdb=args.fetch_imdb,
        do_merge_wikipedia=args.merge_wikipedia,
        do_fetch_wikipedia=args.fetch_wikipedia,
    )

    try:
        settings.require(*required_settings(options))
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    asyncio.run(run(options, args.seed_dir))


if __name__ == "__main__":
    main()
