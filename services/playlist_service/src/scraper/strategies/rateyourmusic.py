"""Rate Your Music chart extraction strategy."""

from bs4 import BeautifulSoup

from ..crawler import ExtractionStrategy, PageExtraction
from ..text import SEPARATOR, album_line, normalize


class RateYourMusicStrategy(ExtractionStrategy):
    """Albums from RYM charts, following the "next" navigation link."""

    name = "rateyourmusic"
    domains = ("rateyourmusic.com",)
    default_page_budget = None

    def extract_page(self, document: BeautifulSoup, page_uri: str, start_uri: str) -> PageExtraction:
        page = PageExtraction()
        for details in document.select("div.chart_details"):
            artist = details.select_one("a.artist")
            album = details.select_one("a.album")
            page.lines.append(
                album_line(
                    normalize(artist.get_text() if artist else "")
                    + SEPARATOR
                    + normalize(album.get_text() if album else "")
                )
            )

        anchor = document.select_one("a.navlinknext")
        href = anchor.get("href") if anchor else None
        if isinstance(href, str) and href.strip():
            page.next_page = href.strip()

        return page
