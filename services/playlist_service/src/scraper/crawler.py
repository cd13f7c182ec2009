"""
Paginating crawler shared by every extraction strategy.

A strategy only knows how to read one page: which nodes are tracks, albums or
artists, and which links lead further. The crawler owns the control flow:

1. resolve the next URI against the start URI,
2. fetch and parse the document,
3. let the strategy extract lines and follow-up URIs,
4. append the lines to the buffer in document order,
5. decide where to go next.

Follow-up URIs (branching crawls such as similar-artist exploration) go on a
FIFO work queue that is drained completely; the page budget only gates the
first level. A linear "next page" link is followed while the budget allows,
and never back to a page already crawled.
Pages are fetched one at a time, never concurrently.
"""

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import ClassVar
from urllib.parse import urljoin

import structlog
from bs4 import BeautifulSoup

from ..observer import LoggingObserver, ResolutionObserver
from .async_base_scraper import DocumentFetcher, parse_html

logger = structlog.get_logger(__name__)


@dataclass
class PageExtraction:
    """What a strategy found on a single page."""

    lines: list[str] = field(default_factory=list)
    follow_ups: list[str] = field(default_factory=list)
    next_page: str | None = None


class ExtractionStrategy(ABC):
    """Per-source extraction rules plugged into the crawler."""

    name: ClassVar[str] = "abstract"
    domains: ClassVar[tuple[str, ...]] = ()
    default_page_budget: ClassVar[int | None] = 1
    leading_lines: ClassVar[tuple[str, ...]] = ()

    def matches_host(self, host: str) -> bool:
        """Whether ``host`` is one of the strategy's domains or a subdomain of one."""
        host = host.lower().rstrip(".")
        return any(host == domain or host.endswith("." + domain) for domain in self.domains)

    @abstractmethod
    def extract_page(self, document: BeautifulSoup, page_uri: str, start_uri: str) -> PageExtraction:
        """Extract lines and follow-up links from one parsed page.

        Args:
            document: Parsed page
            page_uri: Absolute URI of the page being read
            start_uri: URI the crawl started from

        Returns:
            Lines in document order plus follow-up and next-page links
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}>"


class PaginatingCrawler:
    """Drives fetch, extract and recurse for any extraction strategy."""

    def __init__(self, fetcher: DocumentFetcher, observer: ResolutionObserver | None = None) -> None:
        """Initialize the crawler.

        Args:
            fetcher: Document fetcher used for every page
            observer: Progress observer, defaults to structured logging
        """
        self.fetcher = fetcher
        self.observer = observer or LoggingObserver()

    async def crawl(self, strategy: ExtractionStrategy, start_uri: str, page_budget: int | None = None) -> str:
        """Crawl from ``start_uri`` and return the accumulated protocol text.

        Args:
            strategy: Extraction strategy for the source
            start_uri: First page to fetch
            page_budget: Pages to follow linearly; ``None`` uses the strategy
                default, which may itself be ``None`` (follow until no next page)

        Returns:
            Newline-terminated intermediate protocol lines

        Raises:
            ScrapingError: If any page cannot be fetched
            ParsingError: If any page cannot be parsed
        """
        budget = page_budget if page_budget is not None else strategy.default_page_budget
        buffer: list[str] = list(strategy.leading_lines)
        pending: deque[str] = deque()
        next_uri: str | None = start_uri
        visited: set[str] = set()
        pages = 0

        logger.info("Starting crawl", strategy=strategy.name, url=start_uri, page_budget=budget)

        while next_uri is not None:
            page_uri = urljoin(start_uri, next_uri)
            try:
                document = parse_html(await self.fetcher.fetch_document(page_uri))
            except Exception as e:
                logger.error("Crawl aborted", strategy=strategy.name, url=page_uri, pages=pages, error=str(e))
                raise
            pages += 1
            visited.add(page_uri)

            page = strategy.extract_page(document, page_uri, start_uri)
            buffer.extend(page.lines)
            pending.extend(page.follow_ups)
            self.observer.page_extracted(page_uri, page.lines)

            if pending:
                next_uri = pending.popleft()
                budget = 1
            elif budget is not None and budget <= 1:
                next_uri = None
            else:
                next_uri = page.next_page
                if next_uri is not None and urljoin(start_uri, next_uri) in visited:
                    logger.warning("Next page already crawled, stopping", strategy=strategy.name, url=page_uri)
                    next_uri = None
                elif budget is not None:
                    budget -= 1

        logger.info("Crawl finished", strategy=strategy.name, url=start_uri, pages=pages, line_count=len(buffer))
        return "".join(line + "\n" for line in buffer)
