"""
Progress observers for crawling and resolution.

The crawler and the resolver report progress through an observer instead of
writing output themselves. ``LoggingObserver`` turns those notifications into
structlog events.
"""

from typing import Protocol

import structlog

logger = structlog.get_logger(__name__)


class ResolutionObserver(Protocol):
    """Receives progress notifications from the crawler and the resolver."""

    def page_extracted(self, uri: str, lines: list[str]) -> None: ...

    def entry_resolved(self, reference: str, track_count: int) -> None: ...

    def entry_skipped(self, reference: str, error: Exception) -> None: ...


class LoggingObserver:
    """Observer that emits structured log events."""

    def __init__(self, log: structlog.stdlib.BoundLogger | None = None) -> None:
        self.log = log or logger

    def page_extracted(self, uri: str, lines: list[str]) -> None:
        self.log.info("Page extracted", url=uri, line_count=len(lines))
        self.log.debug("Extracted lines", url=uri, lines=[line.replace("\t", " ") for line in lines])

    def entry_resolved(self, reference: str, track_count: int) -> None:
        self.log.info("Entry resolved", reference=reference, track_count=track_count)

    def entry_skipped(self, reference: str, error: Exception) -> None:
        self.log.warning("Could not resolve entry, skipping", reference=reference, error=str(error))
