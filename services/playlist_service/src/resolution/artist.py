"""
Artist entries.

``ArtistEntry`` expands an artist into the tracks of its albums:

1. resolve the artist id,
2. list the artist's albums,
3. fetch each album in turn (popularity, track list),
4. order the albums (``sort.compare_albums``) and apply ``result_limit``,
5. expand each album into tracks and flatten,
6. keep only tracks that credit the artist, which drops foreign tracks from
   compilations and features on other artists' releases.

``TopTracksEntry`` expands an artist into the catalog's top tracks instead.
"""

from typing import Any, Optional

import structlog

from ..catalog.protocol import CatalogClient
from ..models.catalog_models import CatalogAlbumList, CatalogKind
from .album import AlbumEntry
from .entry import Entry
from .queue import Queue
from .sort import compare_albums
from .track import TrackEntry

logger = structlog.get_logger(__name__)


class ArtistEntry(Entry):
    """An artist expanded into the tracks of its albums."""

    kind = CatalogKind.ARTIST

    def __init__(
        self,
        catalog: CatalogClient,
        reference: str,
        entry_id: Optional[str] = None,
        result_limit: Optional[int] = None,
    ) -> None:
        super().__init__(catalog, reference, entry_id, result_limit)
        self.albums_result: CatalogAlbumList | None = None

    async def fetch_albums(self) -> "ArtistEntry":
        """Fetch the artist's album list once."""
        if self.albums_result is None:
            await self.resolve_identity()
            self.albums_result = await self.request_by_id(self.catalog.list_albums_for_artist)
        return self

    def album_queue(self) -> Queue[AlbumEntry]:
        """Wrap the album listing into album entries, in catalog order."""
        albums: list[AlbumEntry] = []
        for item in self.albums_result.items if self.albums_result else []:
            album = AlbumEntry(self.catalog, self.reference)
            album.cache_full(item)
            albums.append(album)
        return Queue(albums)

    def credits_artist(self, track: TrackEntry) -> bool:
        return track.has_artist(self.reference) or track.has_artist(self.id)

    async def create_queue(self) -> Queue[TrackEntry]:
        albums = await self.album_queue().map_sequential(lambda album: album.fetch_album())
        albums = albums.sort(compare_albums)
        if self.result_limit is not None:
            albums = albums.slice(0, self.result_limit)

        expanded = await albums.dispatch()
        tracks = expanded.flatten().filter(self.credits_artist)
        logger.debug(
            "Artist expanded",
            reference=self.reference,
            album_count=len(albums),
            track_count=len(tracks),
        )
        return tracks

    async def dispatch(self) -> Queue[Any]:
        await self.resolve_identity()
        await self.fetch_albums()
        return await self.create_queue()


class TopTracksEntry(ArtistEntry):
    """An artist expanded into the catalog's most popular tracks."""

    async def dispatch(self) -> Queue[Any]:
        await self.resolve_identity()
        top_tracks = await self.request_by_id(self.catalog.top_tracks_for_artist)
        queue = Queue(
            TrackEntry(self.catalog, self.reference, album_title=track.album_name, metadata=track)
            for track in top_tracks
        )
        if self.result_limit is not None:
            queue = queue.slice(0, self.result_limit)
        return queue
