"""
Parser for the intermediate protocol produced by the scrapers.

Each non-empty line becomes one top-level entry:

- ``#album ARTIST\\t-\\tALBUM``: an album expanded into its tracks
- ``#artist ARTIST``: an artist expanded into the tracks of its albums
- ``#top ARTIST``: an artist's top tracks
- ``#shuffle``: a directive to shuffle the final playlist
- anything else: a track reference

Unknown ``#`` directives are ignored.
"""

from dataclasses import dataclass, field
from typing import Any

import structlog

from ..catalog.protocol import CatalogClient
from ..scraper.text import ALBUM_MARKER, ARTIST_MARKER, SHUFFLE_DIRECTIVE, TOP_MARKER
from .album import AlbumEntry
from .artist import ArtistEntry, TopTracksEntry
from .entry import Entry
from .queue import Queue
from .track import TrackEntry

logger = structlog.get_logger(__name__)


@dataclass
class ParsedCollection:
    """Top-level entries in source order plus playlist directives."""

    entries: Queue[Entry] = field(default_factory=Queue)
    shuffle: bool = False


class ProtocolParser:
    """Turns intermediate protocol text into a queue of entries."""

    def __init__(self, catalog: CatalogClient) -> None:
        self.catalog = catalog
        self._markers: dict[str, Any] = {
            ALBUM_MARKER: AlbumEntry,
            ARTIST_MARKER: ArtistEntry,
            TOP_MARKER: TopTracksEntry,
        }

    def parse_line(self, line: str) -> Entry | None:
        """Build the entry for one protocol line, ``None`` for directives and blanks."""
        stripped = line.strip()
        if not stripped:
            return None
        if not stripped.startswith("#"):
            return TrackEntry(self.catalog, stripped)

        marker, _, argument = stripped.partition(" ")
        entry_type = self._markers.get(marker.lower())
        if entry_type is None:
            logger.warning("Ignoring unknown directive", directive=marker)
            return None
        if not argument.strip():
            logger.warning("Ignoring directive without argument", directive=marker)
            return None
        return entry_type(self.catalog, argument)  # type: ignore[no-any-return]

    def parse(self, text: str) -> ParsedCollection:
        entries: list[Entry] = []
        shuffle = False
        for line in text.splitlines():
            if line.strip().lower() == SHUFFLE_DIRECTIVE:
                shuffle = True
                continue
            entry = self.parse_line(line)
            if entry is not None:
                entries.append(entry)

        logger.debug("Parsed protocol text", entry_count=len(entries), shuffle=shuffle)
        return ParsedCollection(entries=Queue(entries), shuffle=shuffle)
