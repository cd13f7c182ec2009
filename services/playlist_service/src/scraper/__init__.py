"""Source extraction: document fetching, per-source strategies and the paginating crawler."""

from .async_base_scraper import AsyncScraperBase, parse_html
from .crawler import ExtractionStrategy, PageExtraction, PaginatingCrawler
from .registry import StrategyRegistry, default_registry, select_strategy

__all__ = [
    "AsyncScraperBase",
    "ExtractionStrategy",
    "PageExtraction",
    "PaginatingCrawler",
    "StrategyRegistry",
    "default_registry",
    "parse_html",
    "select_strategy",
]
