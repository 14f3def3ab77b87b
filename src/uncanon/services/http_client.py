"""Fixed-interval retrying HTTP client shared by the external API adapters."""

import asyncio
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class RetryingClient:
    """
    GET client that retries failed requests a fixed number of times.

    Only exceptions raised while sending the request are retried. HTTP
    error statuses come back as ordinary responses.
    """

    DEFAULT_TIMEOUT = 10.0
    DEFAULT_MAX_ATTEMPTS = 3
    DEFAULT_RETRY_DELAY = 3.0

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Base address every request path is resolved against
            timeout: Per-request timeout in seconds
            max_attempts: Default number of attempts per request
            retry_delay: Default wait between attempts in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay

    async def request_retry(
        self,
        path: str,
        max_attempts: int | None = None,
        retry_delay: float | None = None,
    ) -> httpx.Response:
        """
        GET *path*, retrying on request failures.

        Args:
            path: Request path relative to the base URL
            max_attempts: Overrides the default attempt count
            retry_delay: Overrides the default wait between attempts

        Returns:
            The first response obtained

        Raises:
            ValueError: if fewer than one attempt is requested
            Exception: the last failure once all attempts are used up
        """
        attempts = max_attempts if max_attempts is not None else self.max_attempts
        if attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {attempts}")
        delay = retry_delay if retry_delay is not None else self.retry_delay

        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout) as client:
            for attempt in range(attempts):
                if attempt > 0:
                    await asyncio.sleep(delay)
                try:
                    return await client.get(path)
                except Exception as e:
                    logger.debug(
                        self.redact(f"Attempt {attempt + 1}/{attempts} for {path!r} failed: {e!r}")
                    )
                    if attempt == attempts - 1:
                        raise

    async def fetch_data(self, path: str) -> Any | None:
        """
        GET *path* and decode the JSON body.

        Never raises: any failure is logged once and reported as None so
        batch callers can skip the record and keep going.
        """
        try:
            response = await self.request_retry(path)
            response.raise_for_status()
            return response.json()
        except Exception as e:
            logger.error(self.redact(f"Request to {self.base_url}{path} failed: {e!r}"))
            return None

    def redact(self, message: str) -> str:
        """Hook for subclasses to strip secrets from log messages."""
        return message
