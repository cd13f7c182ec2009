"""YouTube playlist extraction strategy (single page)."""

from bs4 import BeautifulSoup

from ..crawler import ExtractionStrategy, PageExtraction
from ..text import strip_noise


class YouTubeStrategy(ExtractionStrategy):
    """Video titles from a YouTube playlist page."""

    name = "youtube"
    domains = ("youtube.com",)
    default_page_budget = 1

    def extract_page(self, document: BeautifulSoup, page_uri: str, start_uri: str) -> PageExtraction:
        titles = document.select("div.playlist-video-description h4, a.pl-video-title-link")
        return PageExtraction(lines=[line for line in (strip_noise(node.get_text()) for node in titles) if line])
