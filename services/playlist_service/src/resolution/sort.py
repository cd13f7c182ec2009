"""
Album ordering policy used when expanding an artist.

Canonical studio albums come first, then singles, compilations and
appearances on other artists' releases. Within a release type the more
popular album wins; equal albums keep their catalog order.
"""

from .album import AlbumEntry

RELEASE_TYPE_RANK = {
    "album": 0,
    "single": 1,
    "compilation": 2,
    "appears_on": 3,
}


def release_rank(album: AlbumEntry) -> int:
    return RELEASE_TYPE_RANK.get(album.album_type.lower(), len(RELEASE_TYPE_RANK))


def compare_albums(a: AlbumEntry, b: AlbumEntry) -> int:
    """Comparator for ``Queue.sort``: release type first, then popularity descending."""
    rank = release_rank(a) - release_rank(b)
    if rank:
        return rank
    return (b.popularity or 0) - (a.popularity or 0)
