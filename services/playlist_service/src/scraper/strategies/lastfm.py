"""
Last.fm extraction strategy.

Handles artist track charts, similar-artist pages, artist and album charts,
and track pages (similar tracks). Exploration of the similar-artist graph is
controlled by query parameters on the start URI:

- ``nb_tracks``: tracks read from an artist's ``+tracks`` page
- ``nb_similar_tracks``: similar tracks read from each track page
- ``nb_similar_artists``: similar artists followed from an artist
- ``nb_similar_artists_tracks``: tracks read from each similar artist

A missing or non-numeric parameter leaves the corresponding list uncapped.
"""

import re
from collections.abc import Callable
from urllib.parse import parse_qsl, urlencode, urlparse

from bs4 import BeautifulSoup, Tag

from ..crawler import ExtractionStrategy, PageExtraction
from ..text import SHUFFLE_DIRECTIVE, album_line, normalize, top_line, track_line

BASE_URL = "https://www.last.fm"

_LEADING_INT = re.compile(r"^\s*[-+]?\d+")


def count_param(params: dict[str, str], name: str) -> int | None:
    """Read a count parameter, ``None`` when absent, non-numeric or negative."""
    raw = params.get(name)
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    if not match:
        return None
    value = int(match.group())
    return value if value >= 0 else None


def _capped(items: list[Tag], cap: int | None) -> list[Tag]:
    return items if cap is None else items[:cap]


def _link(node: Tag) -> str | None:
    anchor = node.select_one("a")
    href = anchor.get("href") if anchor else None
    return normalize(href) if isinstance(href, str) and href.strip() else None


class LastFmStrategy(ExtractionStrategy):
    """Branching crawl over Last.fm artist, track and chart pages."""

    name = "lastfm"
    domains = ("last.fm",)
    default_page_budget = 1
    leading_lines = (SHUFFLE_DIRECTIVE,)

    def extract_page(self, document: BeautifulSoup, page_uri: str, start_uri: str) -> PageExtraction:
        parsed = urlparse(page_uri)
        params = dict(parse_qsl(parsed.query, keep_blank_values=True))
        path = parsed.path.lower()

        if "/+tracks" in path:
            return self._artist_tracks(document, page_uri, params)
        if "/+similar" in path:
            return self._similar_artists(document, params)
        if "/artists" in path:
            return self._chart(document, top_line)
        if "/albums" in path:
            return self._chart(document, album_line)
        return self._similar_tracks(document, params)

    def _artist_tracks(self, document: BeautifulSoup, page_uri: str, params: dict[str, str]) -> PageExtraction:
        page = PageExtraction()
        header = document.select_one("h1.header-new-title")
        artist = normalize(header.get_text()) if header else ""
        nb_similar_tracks = count_param(params, "nb_similar_tracks")

        for row in _capped(document.select("td.chartlist-name"), count_param(params, "nb_tracks")):
            page.lines.append(track_line(artist, normalize(row.get_text())))
            href = _link(row)
            if href:
                suffix = f"?nb_similar_tracks={nb_similar_tracks}" if nb_similar_tracks is not None else ""
                page.follow_ups.append(BASE_URL + href + suffix)

        if count_param(params, "nb_similar_artists") is not None:
            page.follow_ups.append(page_uri.replace("+tracks", "+similar"))

        return page

    def _similar_artists(self, document: BeautifulSoup, params: dict[str, str]) -> PageExtraction:
        page = PageExtraction()
        nb_similar_artists = count_param(params, "nb_similar_artists")
        nb_similar_artists_tracks = count_param(params, "nb_similar_artists_tracks")

        for item in _capped(document.select("h3.similar-artists-item-name"), nb_similar_artists):
            href = _link(item)
            if not href:
                continue
            # each similar artist gets its own track budget and no further artist fan-out
            follow_params = dict(params)
            follow_params.pop("nb_similar_artists", None)
            follow_params.pop("nb_similar_artists_tracks", None)
            follow_params.pop("nb_tracks", None)
            if nb_similar_artists_tracks is not None:
                follow_params["nb_tracks"] = str(nb_similar_artists_tracks)
            query = urlencode(follow_params)
            page.follow_ups.append(BASE_URL + href + "/+tracks" + (f"?{query}" if query else ""))

        return page

    def _chart(self, document: BeautifulSoup, marker: Callable[[str], str]) -> PageExtraction:
        return PageExtraction(lines=[marker(normalize(row.get_text())) for row in document.select("td.chartlist-name")])

    def _similar_tracks(self, document: BeautifulSoup, params: dict[str, str]) -> PageExtraction:
        page = PageExtraction()
        for item in _capped(document.select(".track-similar-tracks-item"), count_param(params, "nb_similar_tracks")):
            artist = item.select_one("p.track-similar-tracks-item-artist")
            title = item.select_one("h3.track-similar-tracks-item-name")
            page.lines.append(
                track_line(normalize(artist.get_text() if artist else ""), normalize(title.get_text() if title else ""))
            )
        return page
