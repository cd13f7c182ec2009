"""Tests for the intermediate protocol parser."""

from services.playlist_service.src.resolution.album import AlbumEntry
from services.playlist_service.src.resolution.artist import ArtistEntry, TopTracksEntry
from services.playlist_service.src.resolution.parser import ProtocolParser
from services.playlist_service.src.resolution.track import TrackEntry

PROTOCOL_TEXT = """#shuffle
Air\t-\tSexy Boy

#album Air\t-\tMoon Safari
#artist Bonobo
#top Portishead
#playlist something
#album
Massive Attack - Teardrop
"""


class TestProtocolParser:
    """Test line classification."""

    def test_parse_builds_entries_in_order(self, fake_catalog):
        collection = ProtocolParser(fake_catalog).parse(PROTOCOL_TEXT)

        entries = collection.entries.to_list()
        assert [type(entry) for entry in entries] == [
            TrackEntry,
            AlbumEntry,
            ArtistEntry,
            TopTracksEntry,
            TrackEntry,
        ]
        assert [entry.reference for entry in entries] == [
            "Air\t-\tSexy Boy",
            "Air\t-\tMoon Safari",
            "Bonobo",
            "Portishead",
            "Massive Attack - Teardrop",
        ]
        assert all(entry.catalog is fake_catalog for entry in entries)

    def test_shuffle_directive(self, fake_catalog):
        parser = ProtocolParser(fake_catalog)

        assert parser.parse(PROTOCOL_TEXT).shuffle
        assert not parser.parse("Air\t-\tSexy Boy\n").shuffle

    def test_empty_text(self, fake_catalog):
        collection = ProtocolParser(fake_catalog).parse("")

        assert len(collection.entries) == 0
        assert not collection.shuffle

    def test_parse_line(self, fake_catalog):
        parser = ProtocolParser(fake_catalog)

        assert parser.parse_line("   ") is None
        assert parser.parse_line("#unknown thing") is None
        assert isinstance(parser.parse_line("#ALBUM Air\t-\tPremiers Symptômes"), AlbumEntry)
        assert parser.parse_line("  Air\t-\tSexy Boy  ").reference == "Air\t-\tSexy Boy"

    def test_entries_start_unresolved(self, fake_catalog):
        collection = ProtocolParser(fake_catalog).parse(PROTOCOL_TEXT)

        assert all(entry.id is None for entry in collection.entries)
        assert fake_catalog.calls == []
