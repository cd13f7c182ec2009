"""
Extractor registry: picks the extraction strategy for a URI by its host.
"""

from urllib.parse import urlparse

from .crawler import ExtractionStrategy
from .strategies import (
    LastFmStrategy,
    PitchforkStrategy,
    RateYourMusicStrategy,
    RedditStrategy,
    WebPageStrategy,
    YouTubeStrategy,
)


class StrategyRegistry:
    """Ordered table of host-specific strategies plus a generic fallback."""

    def __init__(
        self,
        strategies: list[ExtractionStrategy] | None = None,
        fallback: ExtractionStrategy | None = None,
    ) -> None:
        self.strategies: list[ExtractionStrategy] = list(strategies or [])
        self.fallback = fallback or WebPageStrategy()

    def register(self, strategy: ExtractionStrategy) -> None:
        self.strategies.append(strategy)

    def select_strategy(self, uri: str) -> ExtractionStrategy:
        """Return the first strategy whose domains match the URI host, else the fallback."""
        try:
            host = urlparse(uri.strip()).hostname or ""
        except ValueError:
            host = ""
        if host:
            for strategy in self.strategies:
                if strategy.matches_host(host):
                    return strategy
        return self.fallback


def default_registry() -> StrategyRegistry:
    """Registry with every built-in strategy."""
    return StrategyRegistry(
        [
            LastFmStrategy(),
            PitchforkStrategy(),
            RateYourMusicStrategy(),
            RedditStrategy(),
            YouTubeStrategy(),
        ],
        fallback=WebPageStrategy(),
    )


_default = default_registry()


def select_strategy(uri: str) -> ExtractionStrategy:
    """Pick the extraction strategy for ``uri`` from the built-in table."""
    return _default.select_strategy(uri)
