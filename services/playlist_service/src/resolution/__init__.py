"""
Entry resolution pipeline.

Parses intermediate protocol text into entries, resolves them against the
music catalog and assembles the results into an ordered queue of tracks.
"""

from .album import AlbumEntry
from .artist import ArtistEntry, TopTracksEntry
from .entry import Entry, EntryState
from .orchestrator import PlaylistResolver, extract_and_resolve
from .parser import ParsedCollection, ProtocolParser
from .queue import Queue
from .track import TrackEntry

__all__ = [
    "AlbumEntry",
    "ArtistEntry",
    "Entry",
    "EntryState",
    "ParsedCollection",
    "PlaylistResolver",
    "ProtocolParser",
    "Queue",
    "TopTracksEntry",
    "TrackEntry",
    "extract_and_resolve",
]
