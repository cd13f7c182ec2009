"""
Text helpers for turning scraped markup into intermediate protocol lines.

The intermediate protocol is line oriented:

- ``ARTIST\\t-\\tTITLE``: a track reference
- ``#album ARTIST\\t-\\tALBUM``: an album reference
- ``#top ARTIST``: an artist's top tracks
- ``#shuffle``: shuffle the final playlist
"""

import re

SEPARATOR = "\t-\t"
ALBUM_MARKER = "#album"
ARTIST_MARKER = "#artist"
TOP_MARKER = "#top"
SHUFFLE_DIRECTIVE = "#shuffle"

_WHITESPACE = re.compile(r"\s+")
_URL = re.compile(r"https?:", re.IGNORECASE)
_BRACKETED = re.compile(r"\[[^\]]*\]|\{[^}]*\}")
_NOISY_PARENTHETICAL = re.compile(
    r"\((?:[^)]*\b(?:official|video|audio|lyrics?|visuali[sz]er|hd|hq|4k|live at|full album)\b[^)]*|\s*\d{4}\s*)\)",
    re.IGNORECASE,
)
_DASHES = re.compile(r"\s+[‒–—―-]{1,2}\s+")
_QUOTES = re.compile("[\"“”„«»]")


def normalize(text: str | None) -> str:
    """Collapse runs of whitespace into single spaces and trim."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def strip_noise(text: str | None) -> str:
    """Clean free-form titles scraped from forums and video sites.

    Removes bracketed tags (``[FRESH]``), parentheticals such as
    ``(Official Video)`` or ``(1997)``, and double quotes, and turns any
    dash-like separator into `` - ``.
    """
    if not text:
        return ""
    cleaned = _BRACKETED.sub(" ", text)
    cleaned = _NOISY_PARENTHETICAL.sub(" ", cleaned)
    cleaned = _QUOTES.sub("", cleaned)
    cleaned = _DASHES.sub(" - ", cleaned)
    return normalize(cleaned)


def looks_like_url(text: str) -> bool:
    return bool(_URL.search(text))


def track_line(artist: str, title: str) -> str:
    return f"{artist}{SEPARATOR}{title}"


def album_line(text: str) -> str:
    return f"{ALBUM_MARKER} {text}"


def top_line(artist: str) -> str:
    return f"{TOP_MARKER} {artist}"


def search_text(reference: str) -> str:
    """Turn a protocol reference into free search text."""
    return normalize(reference.replace(SEPARATOR, " "))
