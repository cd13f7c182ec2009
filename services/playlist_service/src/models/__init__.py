"""
Data models for the playlist service.

This module provides Pydantic models for source references and
normalized music catalog records.
"""

from .catalog_models import (
    CatalogAlbum,
    CatalogAlbumList,
    CatalogArtist,
    CatalogKind,
    CatalogSearchResult,
    CatalogTrack,
)
from .source import SourceReference

__all__ = [
    "CatalogAlbum",
    "CatalogAlbumList",
    "CatalogArtist",
    "CatalogKind",
    "CatalogSearchResult",
    "CatalogTrack",
    "SourceReference",
]
