"""Shared test utilities for the playlist service test suite.

Fakes for the document fetcher and the music catalog, plus builders for
catalog records, so that crawling and resolution can be tested without
network access.
"""

from .data_generators import make_album, make_artist, make_track
from .fakes import FakeCatalog, FakeFetcher

__all__ = [
    "FakeCatalog",
    "FakeFetcher",
    "make_album",
    "make_artist",
    "make_track",
]
