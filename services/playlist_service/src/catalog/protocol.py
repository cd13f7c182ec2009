"""Narrow interface the entry resolution pipeline needs from a music catalog."""

from typing import Protocol

from ..models.catalog_models import (
    CatalogAlbumList,
    CatalogEntity,
    CatalogKind,
    CatalogSearchResult,
    CatalogTrack,
)


class CatalogClient(Protocol):
    """Search and lookup operations against a remote music catalog.

    ``search`` raises ``CatalogNotFoundError`` when nothing matches and
    ``CatalogRequestError`` on transport failures. Retries, authentication and
    rate limiting are the implementation's concern.
    """

    async def search(self, kind: CatalogKind, name: str) -> CatalogSearchResult: ...

    async def fetch_entity(self, kind: CatalogKind, entity_id: str) -> CatalogEntity: ...

    async def list_albums_for_artist(self, artist_id: str) -> CatalogAlbumList: ...

    async def top_tracks_for_artist(self, artist_id: str) -> list[CatalogTrack]: ...
