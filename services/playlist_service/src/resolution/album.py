"""Album entries: expand an album reference into its tracks."""

from typing import Any, Optional

import structlog

from ..catalog.protocol import CatalogClient
from ..models.catalog_models import CatalogAlbum, CatalogKind
from .entry import Entry
from .queue import Queue
from .track import TrackEntry

logger = structlog.get_logger(__name__)


class AlbumEntry(Entry):
    """An album to search for, optionally expanded into its tracks."""

    kind = CatalogKind.ALBUM

    def __init__(
        self,
        catalog: CatalogClient,
        reference: str,
        entry_id: Optional[str] = None,
        result_limit: Optional[int] = None,
        fetch_tracks: bool = True,
    ) -> None:
        super().__init__(catalog, reference, entry_id, result_limit)
        self.fetch_tracks = fetch_tracks

    @property
    def record(self) -> CatalogAlbum | None:
        """Best known album record: the fetched one, else the first search hit."""
        if isinstance(self.full_result, CatalogAlbum):
            return self.full_result
        if self.search_result is not None and isinstance(self.search_result.first, CatalogAlbum):
            return self.search_result.first
        return None

    @property
    def title(self) -> str:
        return self.record.name if self.record else ""

    @property
    def album_type(self) -> str:
        if self.record is None:
            return ""
        return self.record.album_group or self.record.album_type or ""

    @property
    def popularity(self) -> int | None:
        return self.record.popularity if self.record else None

    @property
    def uri(self) -> str:
        if self.record and self.record.uri:
            return self.record.uri
        if self.id:
            return f"spotify:album:{self.id}"
        return ""

    async def fetch_album(self) -> "AlbumEntry":
        """Fetch the full album (tracks, popularity) unless it is already cached."""
        if isinstance(self.full_result, CatalogAlbum) and self.full_result.has_tracks:
            return self
        await self.resolve_identity()
        record = await self.request_by_id(lambda album_id: self.catalog.fetch_entity(CatalogKind.ALBUM, album_id))
        listed = self.full_result if isinstance(self.full_result, CatalogAlbum) else None
        if isinstance(record, CatalogAlbum) and listed is not None and record.album_group is None:
            # album_group only appears in artist album listings
            record.album_group = listed.album_group
        self.cache_full(record)
        return self

    def create_queue(self) -> Queue[TrackEntry]:
        """One track entry per album track, truncated to ``result_limit``."""
        record = self.record
        tracks = record.tracks if record is not None and record.tracks is not None else []
        queue = Queue(
            TrackEntry(self.catalog, self.reference, album_title=self.title, metadata=track) for track in tracks
        )
        if self.result_limit is not None:
            queue = queue.slice(0, self.result_limit)
        return queue

    async def dispatch(self) -> Queue[Any]:
        if not self.fetch_tracks:
            await self.resolve_identity()
            return Queue([self])

        await self.resolve_identity()
        await self.fetch_album()
        queue = self.create_queue()
        logger.debug("Album expanded", reference=self.reference, album=self.title, track_count=len(queue))
        return queue
