"""Merge engine: fetch provider data into snapshots and apply it to the catalog."""

import logging
from typing import Any

from uncanon.models import Director, Film
from uncanon.services.imdb_client import IMDbClient
from uncanon.services.snapshots import Phase, SnapshotStore
from uncanon.services.validation import validate_snapshot
from uncanon.services.wikipedia_client import WikipediaClient
from uncanon.store import Catalog

logger = logging.getLogger(__name__)

# IMDb title field -> film column
TITLE_FIELDS = {
    "originalTitle": "original_title",
    "image": "image",
    "plot": "plot",
    "directors": "directors_text",
    "writers": "writers",
    "stars": "stars",
}

WIKIPEDIA_PLOT_FIELDS = {
    "plotShort": "plot_short",
    "plotFull": "plot_full",
}


def _string(raw: Any, key: str) -> str | None:
    value = raw.get(key) if isinstance(raw, dict) else None
    return value if isinstance(value, str) else None


def search_update(raw: Any) -> dict[str, Any]:
    """
    Fields set by the IMDb search phase.

    The provider ranks candidates, so the first one wins. Searches without
    any candidate produce no update.
    """
    results = raw.get("results") if isinstance(raw, dict) else None
    if not isinstance(results, list) or not results:
        return {}
    imdb_id = _string(results[0], "id")
    return {"imdb_id": imdb_id} if imdb_id else {}


def title_update(raw: Any) -> dict[str, Any]:
    """Fields set by the IMDb title phase; malformed fields are left out."""
    values: dict[str, Any] = {}
    for source, column in TITLE_FIELDS.items():
        value = _string(raw, source)
        if value is not None:
            values[column] = value

    section = raw.get("wikipedia") if isinstance(raw, dict) else None
    wikipedia: dict[str, Any] = {}
    url = _string(section, "url")
    if url is not None:
        wikipedia["url"] = url
    for source, key in WIKIPEDIA_PLOT_FIELDS.items():
        plot = section.get(source) if isinstance(section, dict) else None
        plain_text = _string(plot, "plainText")
        html = _string(plot, "html")
        if plain_text is not None and html is not None:
            wikipedia[key] = {"plain_text": plain_text, "html": html}
    if wikipedia:
        values["wikipedia"] = wikipedia
    return values


def summary_update(raw: Any) -> dict[str, Any]:
    """Fields set by the Wikipedia summary phase; malformed fields are left out."""
    values: dict[str, Any] = {}
    for key in ("extract", "extract_html"):
        value = _string(raw, key)
        if value is not None:
            values[key] = value

    thumbnail = _string(raw.get("thumbnail") if isinstance(raw, dict) else None, "source")
    if thumbnail is not None:
        values["thumbnail"] = {"source": thumbnail}

    urls = raw.get("content_urls") if isinstance(raw, dict) else None
    content_urls = {}
    for device in ("desktop", "mobile"):
        page = _string(urls.get(device) if isinstance(urls, dict) else None, "page")
        if page is not None:
            content_urls[device] = {"page": page}
    if content_urls:
        values["content_urls"] = content_urls
    return values


UPDATE_BUILDERS = {
    Phase.IMDB_SEARCH: search_update,
    Phase.IMDB_TITLE: title_update,
    Phase.WIKIPEDIA_SUMMARY: summary_update,
}


class MergeEngine:
    """
    Runs enrichment phases against the catalog.

    Each phase is two steps:
    1. fetch_phase: query the provider for every relevant entity and write
       the responses to the phase snapshot
    2. apply_phase: validate the snapshot and write the derived fields onto
       each entity in it, by internal ID

    apply_phase can be re-run on its own against the last snapshot.
    """

    def __init__(
        self,
        catalog: Catalog,
        snapshots: SnapshotStore,
        imdb_client: IMDbClient | None = None,
        wikipedia_client: WikipediaClient | None = None,
    ) -> None:
        self.catalog = catalog
        self.snapshots = snapshots
        self._imdb_client = imdb_client
        self._wikipedia_client = wikipedia_client

    @property
    def imdb_client(self) -> IMDbClient:
        """IMDb client, created on first use."""
        if self._imdb_client is None:
            self._imdb_client = IMDbClient()
        return self._imdb_client

    @property
    def wikipedia_client(self) -> WikipediaClient:
        """Wikipedia client, created on first use."""
        if self._wikipedia_client is None:
            self._wikipedia_client = WikipediaClient()
        return self._wikipedia_client

    async def merge_imdb(self, do_fetch: bool = False) -> None:
        """Resolve IMDb IDs, then apply title details for the resolved films."""
        await self.run_phase(Phase.IMDB_SEARCH, do_fetch)
        await self.run_phase(Phase.IMDB_TITLE, do_fetch)

    async def merge_wikipedia(self, do_fetch: bool = False) -> None:
        await self.run_phase(Phase.WIKIPEDIA_SUMMARY, do_fetch)

    async def run_phase(self, phase: Phase, do_fetch: bool = False) -> int:
        if do_fetch:
            await self.fetch_phase(phase)
        return await self.apply_phase(phase)

    async def fetch_phase(self, phase: Phase) -> dict[int, Any]:
        """
        Fetch provider data for every relevant entity and snapshot it.

        Entities are requested one at a time. A failed request is logged and
        the entity is left out of the snapshot.

        Returns:
            The snapshot written, keyed by internal ID
        """
        entities = await self._targets(phase)
        logger.info(f"Fetching {phase.value} data for {len(entities)} entities")

        snapshot: dict[int, Any] = {}
        for entity in entities:
            label = entity.title if isinstance(entity, Film) else entity.name
            try:
                result = await self._request(phase, entity)
            except Exception as e:
                logger.error(f"Error fetching {phase.value} for {label!r}: {e}", exc_info=True)
                continue
            if result is None:
                logger.warning(f"No {phase.value} data for {label!r}")
                continue
            snapshot[entity.id] = result

        self.snapshots.write(phase, snapshot)
        logger.info(f"Fetched {phase.value}: {len(snapshot)}/{len(entities)} entities")
        return snapshot

    async def apply_phase(self, phase: Phase) -> int:
        """
        Apply the latest snapshot of *phase* to the catalog.

        Only entities present in the snapshot are touched, and only the
        fields this phase owns are written.

        Returns:
            Number of entities updated
        """
        snapshot = self.snapshots.read(phase)
        model = Director if phase is Phase.WIKIPEDIA_SUMMARY else Film
        collection = self.catalog.directors if model is Director else self.catalog.films

        titles = None
        if phase is Phase.IMDB_SEARCH and snapshot:
            films = await self.catalog.films.find(Film.id.in_(list(snapshot)))
            titles = {film.id: film.title for film in films}
        validate_snapshot(phase, snapshot, titles)

        build = UPDATE_BUILDERS[phase]
        updated = 0
        skipped = 0
        for entity_id, raw in snapshot.items():
            values = build(raw)
            if not values:
                logger.info(f"Nothing to apply from {phase.value} for {entity_id}")
                skipped += 1
                continue
            try:
                updated += await collection.update(model.id == entity_id, values=values)
            except Exception as e:
                logger.error(f"Error applying {phase.value} to {entity_id}: {e}", exc_info=True)

        logger.info(f"Applied {phase.value}: {updated} updated, {skipped} skipped")
        return updated

    async def _targets(self, phase: Phase) -> list[Film] | list[Director]:
        if phase is Phase.IMDB_SEARCH:
            return await self.catalog.films.find()
        if phase is Phase.IMDB_TITLE:
            return await self.catalog.films.find(Film.imdb_id.is_not(None))
        return await self.catalog.directors.find()

    async def _request(self, phase: Phase, entity: Film | Director) -> Any | None:
        if phase is Phase.IMDB_SEARCH:
            expression = self.imdb_client.search_expression(entity.title, entity.year)
            return await self.imdb_client.search_movie(expression)
        if phase is Phase.IMDB_TITLE:
            return await self.imdb_client.get_title(entity.imdb_id)
        return await self.wikipedia_client.get_summary(entity.name)
