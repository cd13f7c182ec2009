"""
Async document fetcher for source pages.

Provides async session management, rate limiting, and browser-like request
headers. Documents are parsed with BeautifulSoup so strategies can query
them with CSS selectors.
"""

import asyncio
import random
import time
from typing import Protocol

import httpx
import structlog
from bs4 import BeautifulSoup

from shared.utils.async_http_client import (
    AsyncHTTPClient,
    AsyncHTTPClientFactory,
    HTTPClientConfig,
    RetryHandler,
)

from ..config import ScrapingConfig, get_config
from ..exceptions import ParsingError, ScrapingError

logger = structlog.get_logger(__name__)


class DocumentFetcher(Protocol):
    """Anything that can turn a URI into raw document text."""

    async def fetch_document(self, uri: str) -> str: ...


def parse_html(html_content: str) -> BeautifulSoup:
    """Parse HTML content into a BeautifulSoup object.

    Args:
        html_content: Raw HTML string

    Returns:
        BeautifulSoup object for querying

    Raises:
        ParsingError: If the document cannot be parsed
    """
    try:
        return BeautifulSoup(html_content, "lxml")
    except Exception as e:
        raise ParsingError(f"Failed to parse document: {e}", html_snippet=html_content) from e


class AsyncScraperBase:
    """Fetches source pages with rate limiting and transport error mapping."""

    def __init__(
        self,
        config: ScrapingConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the async fetcher.

        Args:
            config: Scraping configuration, defaults to the global configuration
            transport: Optional httpx transport (mock transports in tests)
        """
        self.config = config or get_config().scraping
        self.last_request_time = 0.0

        http_config = HTTPClientConfig(
            timeout=self.config.request_timeout,
            user_agent=random.choice(self.config.user_agents),
            retry_attempts=self.config.retry_attempts,
            retry_delay=self.config.retry_delay,
            retry_max_delay=10.0,
        )

        self.factory = AsyncHTTPClientFactory(http_config, transport=transport)
        self.http_client = AsyncHTTPClient(self.factory, RetryHandler(http_config))
        self._current_user_agent = http_config.user_agent

    async def _apply_rate_limit(self) -> None:
        """Apply rate limiting between requests."""
        current_time = time.time()
        time_since_last = current_time - self.last_request_time

        if time_since_last < self.config.rate_limit_delay:
            sleep_time = self.config.rate_limit_delay - time_since_last
            sleep_time += random.uniform(0, 0.5)
            await asyncio.sleep(sleep_time)

        self.last_request_time = time.time()

    async def fetch_document(self, uri: str) -> str:
        """Fetch a page and return its text.

        Args:
            uri: Absolute URI to fetch

        Returns:
            Document text

        Raises:
            ScrapingError: On non-success status or network failure
        """
        await self._apply_rate_limit()

        headers = {
            "User-Agent": self._current_user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
        }

        try:
            response = await self.http_client.request("GET", uri, headers=headers)
        except httpx.HTTPStatusError as e:
            raise ScrapingError(
                f"Fetching {uri} returned HTTP {e.response.status_code}",
                url=uri,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise ScrapingError(f"Fetching {uri} failed: {e}", url=uri) from e

        logger.debug("Fetched document", url=uri, status_code=response.status_code, size=len(response.text))
        return response.text

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.http_client.close()
