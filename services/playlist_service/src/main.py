"""
Command-line entry point for the playlist service.

Crawls a source page, resolves everything found against the music catalog and
prints one ``URI<TAB>ARTISTS - TITLE`` line per track on stdout. Logs go to
stderr as JSON.
"""

import argparse
import asyncio
import logging
import sys

import structlog

from .config import get_config
from .exceptions import ConfigurationError, PlaylistServiceError
from .resolution.orchestrator import extract_and_resolve


# Configure structured logging
def setup_logging(level: str | None = None) -> None:
    """Configure structured logging for the service."""
    config = get_config()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, (level or config.log_level).upper()),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="playlist-service",
        description="Turn a music web page into a list of Spotify tracks.",
    )
    parser.add_argument("uri", help="page to crawl (Last.fm, Pitchfork, RYM, Reddit, YouTube or any web page)")
    parser.add_argument(
        "--pages",
        type=int,
        default=None,
        help="number of pages to follow (default: depends on the source)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="log level (default: PLAYLIST_LOG_LEVEL or INFO)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = build_parser().parse_args(argv)
    if args.pages is not None and args.pages < 1:
        print("--pages must be at least 1", file=sys.stderr)
        return 2

    setup_logging(args.log_level)
    logger = structlog.get_logger(__name__)
    config = get_config()

    errors = config.validate()
    if errors:
        for error in errors:
            logger.error("Invalid configuration", error=error)
        return 1

    try:
        tracks = asyncio.run(extract_and_resolve(args.uri, args.pages, config=config))
    except ConfigurationError as e:
        logger.error("Configuration error", error=e.message, details=e.details)
        return 1
    except PlaylistServiceError as e:
        logger.error("Playlist extraction failed", error=e.message, error_code=e.error_code, details=e.details)
        return 1

    for track in tracks:
        print(f"{track.uri}\t{track}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
