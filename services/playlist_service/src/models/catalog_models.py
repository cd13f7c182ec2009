"""
Music catalog data models.

Normalized views of the artist, album and track objects returned by the
Spotify Web API. Unknown payload fields are ignored.
"""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CatalogKind(str, Enum):
    """Kinds of catalog entities that can be searched for."""

    ARTIST = "artist"
    ALBUM = "album"
    TRACK = "track"


class CatalogArtist(BaseModel):
    """Artist record."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="Catalog identifier")
    name: str = Field(description="Artist name")
    uri: Optional[str] = Field(None, description="Catalog URI (spotify:artist:...)")
    popularity: Optional[int] = Field(None, ge=0, le=100, description="Popularity score")

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "CatalogArtist":
        return cls.model_validate(payload)


class CatalogTrack(BaseModel):
    """Track record."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="Catalog identifier")
    name: str = Field(description="Track title")
    uri: Optional[str] = Field(None, description="Catalog URI (spotify:track:...)")
    artists: list[CatalogArtist] = Field(default_factory=list, description="Credited artists")
    popularity: Optional[int] = Field(None, ge=0, le=100, description="Popularity score")
    album_name: Optional[str] = Field(None, description="Title of the album the track appears on")

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "CatalogTrack":
        """Build a track from a full or simplified track object."""
        data = dict(payload)
        album = data.pop("album", None)
        if isinstance(album, dict) and album.get("name"):
            data["album_name"] = album["name"]
        return cls.model_validate(data)

    def credits(self, name_or_id: str) -> bool:
        """Whether an artist with this name (case-insensitive) or id is credited."""
        needle = name_or_id.strip().lower()
        return any(artist.name.strip().lower() == needle or artist.id == name_or_id for artist in self.artists)


class CatalogAlbum(BaseModel):
    """Album record.

    ``tracks`` is ``None`` for simplified albums (search hits, artist album
    listings) whose track list has not been fetched.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="Catalog identifier")
    name: str = Field(description="Album title")
    album_type: Optional[str] = Field(None, description="album, single, compilation, ...")
    album_group: Optional[str] = Field(None, description="Relation to the listing artist, e.g. appears_on")
    popularity: Optional[int] = Field(None, ge=0, le=100, description="Popularity score")
    uri: Optional[str] = Field(None, description="Catalog URI (spotify:album:...)")
    artists: list[CatalogArtist] = Field(default_factory=list, description="Album artists")
    tracks: Optional[list[CatalogTrack]] = Field(None, description="Track list, in album order")

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "CatalogAlbum":
        """Build an album, flattening the paged ``tracks.items`` list."""
        data = dict(payload)
        tracks = data.pop("tracks", None)
        album = cls.model_validate(data)
        if isinstance(tracks, dict):
            album.tracks = [
                CatalogTrack.from_api({**item, "album": {"name": album.name}}) for item in tracks.get("items") or []
            ]
        elif isinstance(tracks, list):
            album.tracks = [CatalogTrack.from_api(item) for item in tracks]
        return album

    @property
    def has_tracks(self) -> bool:
        return self.tracks is not None


CatalogEntity = Union[CatalogArtist, CatalogAlbum, CatalogTrack]

_ENTITY_TYPES: dict[CatalogKind, Any] = {
    CatalogKind.ARTIST: CatalogArtist,
    CatalogKind.ALBUM: CatalogAlbum,
    CatalogKind.TRACK: CatalogTrack,
}


def entity_from_api(kind: CatalogKind, payload: dict[str, Any]) -> CatalogEntity:
    """Build the model matching ``kind`` from an API payload."""
    return _ENTITY_TYPES[kind].from_api(payload)  # type: ignore[no-any-return]


class CatalogSearchResult(BaseModel):
    """Ordered hits of a catalog search."""

    kind: CatalogKind = Field(description="Kind of entity searched for")
    query: str = Field(description="Query text sent to the catalog")
    items: list[Union[CatalogArtist, CatalogAlbum, CatalogTrack]] = Field(
        default_factory=list, description="Hits in catalog relevance order"
    )

    @property
    def first(self) -> Optional[CatalogEntity]:
        return self.items[0] if self.items else None


class CatalogAlbumList(BaseModel):
    """Albums released by (or featuring) an artist, in catalog order."""

    artist_id: str = Field(description="Catalog identifier of the artist")
    items: list[CatalogAlbum] = Field(default_factory=list, description="Simplified album records")
