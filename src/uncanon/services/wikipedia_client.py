"""Wikipedia REST client for director biography summaries."""

import logging
from typing import Any
from urllib.parse import quote

from uncanon.config import settings
from uncanon.services.http_client import RetryingClient

logger = logging.getLogger(__name__)


class WikipediaClient(RetryingClient):
    """Client for the Wikipedia REST API page summary endpoint."""

    def __init__(self, base_url: str | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("timeout", settings.http_timeout)
        kwargs.setdefault("max_attempts", settings.http_max_attempts)
        kwargs.setdefault("retry_delay", settings.http_retry_delay)
        super().__init__(base_url or settings.wikipedia_base_url, **kwargs)

    async def get_summary(self, subject: str) -> dict[str, Any] | None:
        """
        Get the page summary for a subject.

        Args:
            subject: Page subject, e.g. a director's name

        Returns:
            Summary payload (extract, thumbnail, content URLs) or None on failure
        """
        return await self.fetch_data(f"/page/summary/{self.page_title(subject)}")

    def page_title(self, subject: str) -> str:
        """Canonical, URL-encoded page title: spaces become underscores."""
        return quote(subject.strip().replace(" ", "_"), safe="")
