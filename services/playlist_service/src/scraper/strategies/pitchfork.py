"""Pitchfork list extraction strategy (album reviews and best-of lists)."""

from bs4 import BeautifulSoup

from ..crawler import ExtractionStrategy, PageExtraction
from ..text import SEPARATOR, album_line, normalize


class PitchforkStrategy(ExtractionStrategy):
    """Albums from Pitchfork lists, following the pagination bar."""

    name = "pitchfork"
    domains = ("pitchfork.com",)
    default_page_budget = None

    def extract_page(self, document: BeautifulSoup, page_uri: str, start_uri: str) -> PageExtraction:
        page = PageExtraction()
        for work in document.select('div[class*="artist-work"]'):
            artist = work.select_one('ul[class*="artist-list"] li')
            album = work.select_one('h2[class*="work-title"]')
            page.lines.append(
                album_line(
                    normalize(artist.get_text() if artist else "")
                    + SEPARATOR
                    + normalize(album.get_text() if album else "")
                )
            )

        active = document.select_one(".fts-pagination__list-item--active")
        following = active.find_next_sibling() if active else None
        anchor = following.select_one("a") if following else None
        href = anchor.get("href") if anchor else None
        if isinstance(href, str) and href.strip():
            page.next_page = href.strip()

        return page
