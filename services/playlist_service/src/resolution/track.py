"""Track entries: the leaves of every resolution."""

from typing import Optional

from ..catalog.protocol import CatalogClient
from ..models.catalog_models import CatalogArtist, CatalogKind, CatalogTrack
from .entry import Entry, EntryState
from .queue import Queue


class TrackEntry(Entry):
    """A single track, either found by search or handed down by an album."""

    kind = CatalogKind.TRACK

    def __init__(
        self,
        catalog: CatalogClient,
        reference: str,
        album_title: Optional[str] = None,
        metadata: Optional[CatalogTrack] = None,
    ) -> None:
        super().__init__(catalog, reference)
        self.album_title = album_title
        if metadata is not None:
            self.cache_full(metadata)

    @property
    def metadata(self) -> CatalogTrack | None:
        """Resolved track record, from a fetch, an album, or the first search hit."""
        if isinstance(self.full_result, CatalogTrack):
            return self.full_result
        if self.search_result is not None and isinstance(self.search_result.first, CatalogTrack):
            return self.search_result.first
        return None

    async def fetch_track(self) -> "TrackEntry":
        """Fetch the track record when only its id is known."""
        if self.metadata is None and self.id is not None:
            record = await self.request_by_id(lambda track_id: self.catalog.fetch_entity(CatalogKind.TRACK, track_id))
            self.cache_full(record)
        return self

    async def dispatch(self) -> Queue["TrackEntry"]:
        await self.resolve_identity()
        if self.state is EntryState.ID_ONLY:
            await self.fetch_track()
        return Queue([self])

    @property
    def title(self) -> str:
        return self.metadata.name if self.metadata else ""

    @property
    def artists(self) -> list[CatalogArtist]:
        return list(self.metadata.artists) if self.metadata else []

    @property
    def uri(self) -> str:
        if self.metadata and self.metadata.uri:
            return self.metadata.uri
        if self.id:
            return f"spotify:track:{self.id}"
        return ""

    def has_artist(self, name_or_id: str | None) -> bool:
        """Whether the track credits this artist (name, case-insensitive, or id)."""
        if not name_or_id or self.metadata is None:
            return False
        return self.metadata.credits(name_or_id)

    def __str__(self) -> str:
        artists = ", ".join(artist.name for artist in self.artists)
        return f"{artists} - {self.title}" if self.metadata else self.reference
