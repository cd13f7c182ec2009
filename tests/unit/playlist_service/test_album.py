"""Tests for album entries and album ordering."""

import pytest

from services.playlist_service.src.exceptions import CatalogRequestError, EntryNotFoundError
from services.playlist_service.src.models.catalog_models import CatalogKind
from services.playlist_service.src.resolution.album import AlbumEntry
from services.playlist_service.src.resolution.entry import EntryState
from services.playlist_service.src.resolution.queue import Queue
from services.playlist_service.src.resolution.sort import compare_albums, release_rank
from tests.shared_utilities import make_album, make_artist, make_track

AIR = make_artist("air1", "Air")
MOON_SAFARI_TRACKS = [
    make_track("t1", "La Femme d'Argent", AIR),
    make_track("t2", "Sexy Boy", AIR),
    make_track("t3", "All I Need", AIR),
]
MOON_SAFARI = make_album("a1", "Moon Safari", popularity=70, tracks=MOON_SAFARI_TRACKS)
REFERENCE = "Air\t-\tMoon Safari"


@pytest.fixture
def catalog(fake_catalog):
    """Catalog that knows Moon Safari."""
    fake_catalog.add_search(CatalogKind.ALBUM, REFERENCE, make_album("a1", "Moon Safari"))
    fake_catalog.add_entity(CatalogKind.ALBUM, MOON_SAFARI)
    return fake_catalog


class TestAlbumEntry:
    """Test album dispatch."""

    @pytest.mark.asyncio
    async def test_dispatch_expands_tracks_in_order(self, catalog):
        album = AlbumEntry(catalog, REFERENCE)

        tracks = await album.dispatch()

        assert [track.title for track in tracks] == ["La Femme d'Argent", "Sexy Boy", "All I Need"]
        assert all(track.album_title == "Moon Safari" for track in tracks)
        assert all(track.reference == REFERENCE for track in tracks)
        assert all(track.catalog is catalog for track in tracks)
        assert album.state is EntryState.FULL_CACHED

    @pytest.mark.asyncio
    async def test_result_limit_truncates(self, catalog):
        album = AlbumEntry(catalog, REFERENCE, result_limit=2)

        tracks = await album.dispatch()

        assert [track.id for track in tracks] == ["t1", "t2"]

    @pytest.mark.asyncio
    async def test_zero_limit_yields_nothing(self, catalog):
        album = AlbumEntry(catalog, REFERENCE, result_limit=0)

        assert len(await album.dispatch()) == 0

    @pytest.mark.asyncio
    async def test_without_fetch_tracks_returns_album(self, catalog):
        album = AlbumEntry(catalog, REFERENCE, fetch_tracks=False)

        result = await album.dispatch()

        assert result == Queue([album])
        assert album.state is EntryState.SEARCH_CACHED
        assert album.uri == "spotify:album:a1"
        assert catalog.count("fetch_entity") == 0

    @pytest.mark.asyncio
    async def test_fetch_album_is_memoised(self, catalog):
        album = AlbumEntry(catalog, REFERENCE)

        await album.fetch_album()
        await album.fetch_album()

        assert catalog.count("fetch_entity") == 1
        assert album.popularity == 70

    @pytest.mark.asyncio
    async def test_fetch_keeps_listing_album_group(self, catalog):
        album = AlbumEntry(catalog, REFERENCE)
        album.cache_full(make_album("a1", "Moon Safari", album_group="appears_on"))

        await album.fetch_album()

        assert album.album_type == "appears_on"
        assert album.record is not None
        assert album.record.has_tracks

    @pytest.mark.asyncio
    async def test_unknown_album_raises(self, fake_catalog):
        album = AlbumEntry(fake_catalog, "Nobody\t-\tNothing")

        with pytest.raises(EntryNotFoundError):
            await album.dispatch()

    @pytest.mark.asyncio
    async def test_single_word_reference_rejected_by_catalog(self, fake_catalog):
        album = AlbumEntry(fake_catalog, "Muse")

        with pytest.raises(EntryNotFoundError) as exc_info:
            await album.dispatch()

        assert exc_info.value.reference == "Muse"
        assert isinstance(exc_info.value.__cause__, CatalogRequestError)
        assert fake_catalog.count("fetch_entity") == 1


class TestCompareAlbums:
    """Test the album ordering policy."""

    def entry(self, fake_catalog, album_id, album_type, popularity=None, album_group=None):
        album = AlbumEntry(fake_catalog, "Air")
        album.cache_full(
            make_album(album_id, album_id, album_type=album_type, album_group=album_group, popularity=popularity)
        )
        return album

    def test_release_rank(self, fake_catalog):
        assert release_rank(self.entry(fake_catalog, "a", "album")) == 0
        assert release_rank(self.entry(fake_catalog, "b", "single")) == 1
        assert release_rank(self.entry(fake_catalog, "c", "album", album_group="appears_on")) == 3
        assert release_rank(self.entry(fake_catalog, "d", "mixtape")) == 4

    def test_type_then_popularity(self, fake_catalog):
        albums = Queue(
            [
                self.entry(fake_catalog, "single", "single", 90),
                self.entry(fake_catalog, "quiet", "album", 10),
                self.entry(fake_catalog, "comp", "compilation", 99),
                self.entry(fake_catalog, "loud", "album", 80),
                self.entry(fake_catalog, "unknown", "album"),
            ]
        )

        ordered = albums.sort(compare_albums)

        assert [album.id for album in ordered] == ["loud", "quiet", "unknown", "single", "comp"]

    def test_ties_keep_catalog_order(self, fake_catalog):
        albums = Queue(
            [self.entry(fake_catalog, "first", "album", 50), self.entry(fake_catalog, "second", "album", 50)]
        )

        assert [album.id for album in albums.sort(compare_albums)] == ["first", "second"]
