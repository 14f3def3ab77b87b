"""IMDb-API client for resolving and describing films."""

import logging
from typing import Any
from urllib.parse import quote

from uncanon.config import settings
from uncanon.services.http_client import RetryingClient

logger = logging.getLogger(__name__)


class IMDbClient(RetryingClient):
    """Client for the IMDb-API (imdb-api.com) REST service."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize IMDb client.

        Args:
            api_key: IMDb-API key (uses settings if not provided)
            base_url: API base URL (uses settings if not provided)
            kwargs: Retry settings passed to RetryingClient
        """
        kwargs.setdefault("timeout", settings.http_timeout)
        kwargs.setdefault("max_attempts", settings.http_max_attempts)
        kwargs.setdefault("retry_delay", settings.http_retry_delay)
        super().__init__(base_url or settings.imdb_base_url, **kwargs)
        self.api_key = api_key or settings.imdb_api_key
        if not self.api_key:
            logger.warning("IMDb API key not configured")

    async def search_movie(self, expression: str) -> dict[str, Any] | None:
        """
        Search for films matching a free-text expression.

        Args:
            expression: Search text, typically title and year

        Returns:
            Search payload with ranked ``results`` or None on failure
        """
        if not self.api_key:
            logger.warning("Cannot search IMDb without API key")
            return None
        return await self.fetch_data(f"/SearchMovie/{self.api_key}/{quote(expression, safe='')}")

    async def get_title(self, imdb_id: str) -> dict[str, Any] | None:
        """
        Get full title metadata including the Wikipedia plot section.

        Args:
            imdb_id: IMDb title ID (e.g. "tt0111161")

        Returns:
            Title payload or None on failure
        """
        if not self.api_key:
            logger.warning("Cannot fetch IMDb title without API key")
            return None
        return await self.fetch_data(f"/Title/{self.api_key}/{quote(imdb_id, safe='')}/Wikipedia")

    def search_expression(self, title: str, year: int | None = None) -> str:
        """Build the search text for a film; the year narrows the ranking."""
        if year:
            return f"{title} {year}"
        return title

    def redact(self, message: str) -> str:
        if self.api_key:
            return message.replace(self.api_key, "***")
        return message
