"""
Shared async HTTP plumbing for the services.

Each owner (the page fetcher, the catalog client) gets one pooled httpx client,
created on first use and kept until closed. Timeouts and network errors are
retried with exponential backoff; HTTP status errors are raised at once so
callers can map them onto their own exceptions.
"""

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx
import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")

RETRYABLE_ERRORS: tuple[type[Exception], ...] = (httpx.TimeoutException, httpx.NetworkError)


@dataclass
class HTTPClientConfig:
    """Pool, timeout and retry settings for one client."""

    timeout: float = 10.0
    max_keepalive_connections: int = 10
    max_connections: int = 20
    keepalive_expiry: float = 30.0
    user_agent: str = "playlist-service/1.0"
    retry_attempts: int = 3
    retry_delay: float = 1.0
    retry_max_delay: float = 30.0
    retry_factor: float = 2.0
    follow_redirects: bool = True

    def build_client(self, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            limits=httpx.Limits(
                max_keepalive_connections=self.max_keepalive_connections,
                max_connections=self.max_connections,
                keepalive_expiry=self.keepalive_expiry,
            ),
            headers={"User-Agent": self.user_agent},
            follow_redirects=self.follow_redirects,
            transport=transport,
        )


class AsyncHTTPClientFactory:
    """Owns a lazily created httpx client shared by all requests of one owner."""

    def __init__(
        self,
        config: HTTPClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the factory.

        Args:
            config: Client settings, defaults if not provided
            transport: Optional httpx transport (mock transports in tests)
        """
        self.config = config or HTTPClientConfig()
        self.transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = self.config.build_client(self.transport)
        return self._client

    @property
    def is_open(self) -> bool:
        return self._client is not None

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


class RetryHandler:
    """Retries transport failures with exponential backoff and jitter."""

    def __init__(self, config: HTTPClientConfig | None = None) -> None:
        self.config = config or HTTPClientConfig()

    def backoff(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number ``attempt`` (1-based)."""
        delay = self.config.retry_delay * self.config.retry_factor ** (attempt - 1)
        return min(delay + random.uniform(0, 1), self.config.retry_max_delay)

    async def execute_with_retry(self, func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
        """Await ``func`` until it succeeds or ``retry_attempts`` are used up.

        Raises:
            httpx.TimeoutException: If the last attempt timed out
            httpx.NetworkError: If the last attempt could not connect
            Exception: Anything else ``func`` raises, immediately
        """
        attempts = max(1, self.config.retry_attempts)
        attempt = 1
        while True:
            try:
                return await func(*args, **kwargs)
            except RETRYABLE_ERRORS as e:
                if attempt >= attempts:
                    logger.error("All retry attempts failed", attempts=attempts, error=str(e))
                    raise
                sleep_time = self.backoff(attempt)
                logger.warning(
                    "Request failed, retrying",
                    attempt=attempt,
                    max_attempts=attempts,
                    sleep_time=sleep_time,
                    error=str(e),
                )
                await asyncio.sleep(sleep_time)
                attempt += 1


class AsyncHTTPClient:
    """Sends requests through a factory's client, retrying transport failures."""

    def __init__(self, factory: AsyncHTTPClientFactory, retry_handler: RetryHandler | None = None) -> None:
        self.factory = factory
        self.retry_handler = retry_handler or RetryHandler(factory.config)

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = await self.factory.client.request(method, url, **kwargs)
        response.raise_for_status()
        return response

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Make an HTTP request.

        Raises:
            httpx.HTTPStatusError: If the response status is not successful
            httpx.HTTPError: If the request still fails after retries
        """
        try:
            return await self.retry_handler.execute_with_retry(self._send, method, url, **kwargs)
        except httpx.HTTPStatusError as e:
            logger.warning("Request rejected", method=method, url=url, status_code=e.response.status_code)
            raise
        except httpx.HTTPError as e:
            logger.error("Request failed", method=method, url=url, error=str(e))
            raise

    async def close(self) -> None:
        await self.factory.close()
