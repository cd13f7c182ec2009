"""Generic fallback strategy for pages no other strategy recognizes."""

from bs4 import BeautifulSoup

from ..crawler import ExtractionStrategy, PageExtraction
from ..text import strip_noise


class WebPageStrategy(ExtractionStrategy):
    """Every hyperlink text on a single page is a track candidate."""

    name = "webpage"
    domains = ()
    default_page_budget = 1

    def matches_host(self, host: str) -> bool:
        return True

    def extract_page(self, document: BeautifulSoup, page_uri: str, start_uri: str) -> PageExtraction:
        texts = (strip_noise(anchor.get_text()) for anchor in document.select("a"))
        return PageExtraction(lines=[text for text in texts if text])
