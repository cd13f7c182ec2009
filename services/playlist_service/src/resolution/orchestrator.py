"""
Resolution orchestrator: from a source URI to an ordered queue of tracks.

Extraction (strategy selection and crawling), protocol parsing and entry
resolution are composed here. Entries are dispatched one after another and
their results are concatenated in entry order.
"""

import random
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from ..catalog.protocol import CatalogClient
from ..catalog.spotify_client import SpotifyCatalogClient
from ..config import ServiceConfig, get_config
from ..exceptions import EntryNotFoundError, PlaylistServiceError, ValidationError
from ..models.source import SourceReference
from ..observer import LoggingObserver, ResolutionObserver
from ..scraper.async_base_scraper import AsyncScraperBase, DocumentFetcher
from ..scraper.crawler import PaginatingCrawler
from ..scraper.registry import StrategyRegistry, default_registry
from .entry import Entry
from .parser import ProtocolParser
from .queue import Queue
from .track import TrackEntry

logger = structlog.get_logger(__name__)


class PlaylistResolver:
    """Extracts a source and resolves its entries into tracks."""

    def __init__(
        self,
        catalog: CatalogClient,
        fetcher: DocumentFetcher | None = None,
        registry: StrategyRegistry | None = None,
        observer: ResolutionObserver | None = None,
        config: ServiceConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            catalog: Catalog client used by every entry
            fetcher: Document fetcher, defaults to ``AsyncScraperBase``
            registry: Strategy registry, defaults to the built-in strategies
            observer: Progress observer, defaults to structured logging
            config: Service configuration, defaults to the global configuration
            rng: Random source for the ``#shuffle`` directive
        """
        self.config = config or get_config()
        self.catalog = catalog
        self.fetcher = fetcher or AsyncScraperBase(self.config.scraping)
        self.registry = registry or default_registry()
        self.observer = observer or LoggingObserver()
        self.crawler = PaginatingCrawler(self.fetcher, self.observer)
        self.parser = ProtocolParser(catalog)
        self.rng = rng or random.Random(self.config.resolution.shuffle_seed)

    async def extract(self, source: SourceReference) -> str:
        """Crawl the source and return intermediate protocol text."""
        strategy = self.registry.select_strategy(source.uri)
        logger.info("Selected extraction strategy", url=source.uri, strategy=strategy.name)
        return await self.crawler.crawl(strategy, source.uri, source.page_budget)

    async def _dispatch_entry(self, entry: Entry) -> Queue[Any]:
        try:
            result = await entry.dispatch()
        except EntryNotFoundError as e:
            if not self.config.resolution.skip_unresolved:
                logger.error("Entry resolution failed", reference=entry.reference, error=str(e))
                raise
            self.observer.entry_skipped(entry.reference, e)
            return Queue()
        except PlaylistServiceError as e:
            e.details.setdefault("reference", entry.reference)
            logger.error(
                "Entry resolution failed", reference=entry.reference, error=e.message, error_code=e.error_code
            )
            raise
        self.observer.entry_resolved(entry.reference, len(result))
        return result

    async def resolve(self, entries: Queue[Entry]) -> Queue[TrackEntry]:
        """Dispatch every entry in order and flatten the results into one queue.

        Raises:
            EntryNotFoundError: If an entry cannot be resolved and
                ``skip_unresolved`` is disabled
            CatalogRequestError: If a catalog request fails; its details carry
                the reference of the entry being resolved
        """
        results = await entries.map_sequential(self._dispatch_entry)
        return results.flatten()

    async def extract_and_resolve(self, source_uri: str, page_budget: int | None = None) -> Queue[TrackEntry]:
        """Crawl ``source_uri`` and resolve everything found into tracks.

        Args:
            source_uri: Page to start from
            page_budget: Pages to follow; ``None`` uses the strategy default

        Returns:
            Resolved tracks in source order, shuffled if the source asked for it

        Raises:
            ValidationError: If the URI or page budget is invalid
            ScrapingError: If a page cannot be fetched
        """
        try:
            source = SourceReference(uri=source_uri, page_budget=page_budget)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid source: {e.errors()[0]['msg']}", field="source", value=source_uri) from e
        text = await self.extract(source)
        collection = self.parser.parse(text)
        tracks = await self.resolve(collection.entries)
        if collection.shuffle:
            tracks = tracks.shuffle(self.rng)

        logger.info(
            "Source resolved",
            url=source.uri,
            entry_count=len(collection.entries),
            track_count=len(tracks),
            shuffled=collection.shuffle,
        )
        return tracks


async def extract_and_resolve(
    source_uri: str,
    page_budget: int | None = None,
    *,
    catalog: CatalogClient | None = None,
    fetcher: DocumentFetcher | None = None,
    observer: ResolutionObserver | None = None,
    config: ServiceConfig | None = None,
) -> Queue[TrackEntry]:
    """Turn a source URI into an ordered queue of resolved tracks.

    Creates a Spotify catalog client and an HTTP fetcher from the configuration
    when none are given, and closes the ones it created.
    """
    config = config or get_config()
    own_catalog = SpotifyCatalogClient(config.catalog) if catalog is None else None
    own_fetcher = AsyncScraperBase(config.scraping) if fetcher is None else None
    resolver = PlaylistResolver(
        catalog or own_catalog,  # type: ignore[arg-type]
        fetcher=fetcher or own_fetcher,
        observer=observer,
        config=config,
    )
    try:
        return await resolver.extract_and_resolve(source_uri, page_budget)
    finally:
        if own_catalog is not None:
            await own_catalog.close()
        if own_fetcher is not None:
            await own_fetcher.close()
