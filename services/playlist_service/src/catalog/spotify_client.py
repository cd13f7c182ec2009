"""
Spotify Web API catalog client.

Implements the ``CatalogClient`` protocol with the client-credentials flow.
Tokens are cached until shortly before they expire and refreshed once when
the API answers 401. Paged endpoints (artist albums, album tracks) are
followed through their ``next`` links.
"""

import base64
import time
from typing import Any
from urllib.parse import quote

import httpx
import structlog

from shared.utils.async_http_client import (
    AsyncHTTPClient,
    AsyncHTTPClientFactory,
    HTTPClientConfig,
    RetryHandler,
)

from ..config import CatalogConfig, get_config
from ..exceptions import CatalogNotFoundError, CatalogRequestError, ConfigurationError
from ..models.catalog_models import (
    CatalogAlbum,
    CatalogAlbumList,
    CatalogEntity,
    CatalogKind,
    CatalogSearchResult,
    CatalogTrack,
    entity_from_api,
)
from ..scraper.text import search_text

logger = structlog.get_logger(__name__)

_TOKEN_EXPIRY_MARGIN = 30


class SpotifyCatalogClient:
    """Async client for the parts of the Spotify Web API the resolver uses."""

    def __init__(
        self,
        config: CatalogConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Spotify client.

        Args:
            config: Catalog configuration, defaults to the global configuration
            transport: Optional httpx transport (mock transports in tests)
        """
        self.config = config or get_config().catalog
        http_config = HTTPClientConfig(
            timeout=self.config.request_timeout,
            retry_attempts=self.config.retry_attempts,
        )
        self.factory = AsyncHTTPClientFactory(http_config, transport=transport)
        self.http_client = AsyncHTTPClient(self.factory, RetryHandler(http_config))
        self._access_token: str | None = None
        self._access_token_expire_at = 0.0

    async def _get_access_token(self) -> str:
        if self.config.access_token:
            return self.config.access_token

        if not self.config.client_id or not self.config.client_secret:
            raise ConfigurationError("Spotify client_id and client_secret are required", config_key="catalog")

        now = time.time()
        if self._access_token and now < self._access_token_expire_at:
            return self._access_token

        credentials = f"{self.config.client_id}:{self.config.client_secret}".encode()
        try:
            response = await self.http_client.request(
                "POST",
                self.config.token_url,
                data={"grant_type": "client_credentials"},
                headers={"Authorization": f"Basic {base64.b64encode(credentials).decode('ascii')}"},
            )
        except httpx.HTTPStatusError as e:
            raise CatalogRequestError(
                "Spotify token request failed", endpoint=self.config.token_url, status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            raise CatalogRequestError(f"Spotify token request failed: {e}", endpoint=self.config.token_url) from e

        payload = response.json()
        token = payload.get("access_token")
        if not token:
            raise CatalogRequestError("Spotify token response missing access_token", endpoint=self.config.token_url)

        expires_in = int(payload.get("expires_in") or 0)
        self._access_token = token
        self._access_token_expire_at = now + max(0, expires_in - _TOKEN_EXPIRY_MARGIN)
        logger.debug("Obtained Spotify access token", expires_in=expires_in)
        return str(token)

    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET a JSON document, refreshing the token once on 401."""
        if not url.startswith("http"):
            url = self.config.api_base_url.rstrip("/") + url

        for attempt in range(2):
            token = await self._get_access_token()
            try:
                response = await self.http_client.request(
                    "GET", url, params=params, headers={"Authorization": f"Bearer {token}"}
                )
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                if status_code == 401 and attempt == 0 and not self.config.access_token:
                    self._access_token = None
                    continue
                raise CatalogRequestError(
                    f"Spotify request failed ({status_code})", endpoint=url, status_code=status_code
                ) from e
            except httpx.HTTPError as e:
                raise CatalogRequestError(f"Spotify request failed: {e}", endpoint=url) from e
            return response.json()  # type: ignore[no-any-return]

        raise CatalogRequestError("Spotify request unauthorized", endpoint=url, status_code=401)

    async def search(self, kind: CatalogKind, name: str) -> CatalogSearchResult:
        """Search the catalog by name.

        Raises:
            CatalogNotFoundError: If the search has no hits
            CatalogRequestError: If the request fails
        """
        query = search_text(name)
        params: dict[str, Any] = {"q": query, "type": kind.value, "limit": self.config.search_limit}
        if self.config.market:
            params["market"] = self.config.market

        payload = await self._get_json("/search", params)
        items = (payload.get(f"{kind.value}s") or {}).get("items") or []
        hits = [entity_from_api(kind, item) for item in items if item and item.get("id")]
        if not hits:
            raise CatalogNotFoundError(f"No {kind.value} found for {query!r}", kind=kind.value, query=query)

        logger.debug("Catalog search", kind=kind.value, query=query, hits=len(hits))
        return CatalogSearchResult(kind=kind, query=query, items=hits)

    async def fetch_entity(self, kind: CatalogKind, entity_id: str) -> CatalogEntity:
        """Fetch one artist, album (with its full track list) or track by id."""
        payload = await self._get_json(f"/{kind.value}s/{quote(entity_id, safe='')}")

        if kind is CatalogKind.ALBUM:
            tracks = payload.get("tracks") or {}
            items = list(tracks.get("items") or [])
            next_url = tracks.get("next")
            while next_url:
                page = await self._get_json(next_url)
                items.extend(page.get("items") or [])
                next_url = page.get("next")
            payload = {**payload, "tracks": {"items": items}}

        return entity_from_api(kind, payload)

    async def list_albums_for_artist(self, artist_id: str) -> CatalogAlbumList:
        """List an artist's albums, following pagination up to ``max_album_pages``."""
        params: dict[str, Any] = {
            "include_groups": self.config.album_include_groups,
            "limit": self.config.album_page_size,
        }
        if self.config.market:
            params["market"] = self.config.market

        request_params: dict[str, Any] | None = params
        url: str | None = f"/artists/{quote(artist_id, safe='')}/albums"
        albums: list[CatalogAlbum] = []
        pages = 0
        while url and pages < self.config.max_album_pages:
            payload = await self._get_json(url, request_params)
            albums.extend(CatalogAlbum.from_api(item) for item in payload.get("items") or [] if item.get("id"))
            url = payload.get("next")
            request_params = None  # the next link carries the query
            pages += 1

        return CatalogAlbumList(artist_id=artist_id, items=albums)

    async def top_tracks_for_artist(self, artist_id: str) -> list[CatalogTrack]:
        """An artist's most popular tracks in the configured market."""
        payload = await self._get_json(
            f"/artists/{quote(artist_id, safe='')}/top-tracks", {"market": self.config.market or "US"}
        )
        return [CatalogTrack.from_api(item) for item in payload.get("tracks") or [] if item.get("id")]

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.http_client.close()
