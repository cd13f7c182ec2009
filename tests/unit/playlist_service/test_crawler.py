"""Tests for the paginating crawler."""

from unittest.mock import MagicMock

import pytest
from bs4 import BeautifulSoup

from services.playlist_service.src.exceptions import ScrapingError
from services.playlist_service.src.scraper.crawler import ExtractionStrategy, PageExtraction, PaginatingCrawler
from services.playlist_service.src.scraper.strategies.lastfm import LastFmStrategy
from tests.shared_utilities import FakeFetcher


class ListStrategy(ExtractionStrategy):
    """Reads ``li`` texts, ``a.follow`` follow-ups and an ``a.next`` link."""

    name = "list"
    domains = ("example.com",)
    default_page_budget = 1

    def extract_page(self, document: BeautifulSoup, page_uri: str, start_uri: str) -> PageExtraction:
        next_link = document.select_one("a.next")
        return PageExtraction(
            lines=[item.get_text() for item in document.select("li")],
            follow_ups=[a["href"] for a in document.select("a.follow")],
            next_page=next_link["href"] if next_link else None,
        )


class UnboundedListStrategy(ListStrategy):
    default_page_budget = None


class ShuffledListStrategy(ListStrategy):
    leading_lines = ("#shuffle",)


def page(*items: str, next_page: str | None = None, follow_ups: tuple[str, ...] = ()) -> str:
    body = "".join(f"<li>{item}</li>" for item in items)
    body += "".join(f'<a class="follow" href="{href}">f</a>' for href in follow_ups)
    if next_page:
        body += f'<a class="next" href="{next_page}">next</a>'
    return f"<html><body><ul>{body}</ul></body></html>"


START = "https://example.com/list"


@pytest.fixture
def linear_fetcher():
    """Three pages linked by next links."""
    return FakeFetcher(
        {
            START: page("a", "b", next_page="/list?page=2"),
            "https://example.com/list?page=2": page("c", next_page="/list?page=3"),
            "https://example.com/list?page=3": page("d"),
        }
    )


class TestPaginatingCrawler:
    """Test crawl control flow."""

    @pytest.mark.asyncio
    async def test_linear_pagination_respects_budget(self, linear_fetcher):
        crawler = PaginatingCrawler(linear_fetcher, MagicMock())

        text = await crawler.crawl(ListStrategy(), START, page_budget=2)

        assert text == "a\nb\nc\n"
        assert linear_fetcher.calls == [START, "https://example.com/list?page=2"]

    @pytest.mark.asyncio
    async def test_default_budget_fetches_one_page(self, linear_fetcher):
        crawler = PaginatingCrawler(linear_fetcher, MagicMock())

        text = await crawler.crawl(ListStrategy(), START)

        assert text == "a\nb\n"
        assert linear_fetcher.calls == [START]

    @pytest.mark.asyncio
    async def test_unbounded_budget_follows_until_no_next_page(self, linear_fetcher):
        crawler = PaginatingCrawler(linear_fetcher, MagicMock())

        text = await crawler.crawl(UnboundedListStrategy(), START)

        assert text == "a\nb\nc\nd\n"
        assert len(linear_fetcher.calls) == 3

    @pytest.mark.asyncio
    async def test_explicit_budget_overrides_unbounded_default(self, linear_fetcher):
        crawler = PaginatingCrawler(linear_fetcher, MagicMock())

        text = await crawler.crawl(UnboundedListStrategy(), START, page_budget=1)

        assert text == "a\nb\n"

    @pytest.mark.asyncio
    async def test_follow_ups_are_drained_in_order(self):
        fetcher = FakeFetcher(
            {
                START: page("root", next_page="/never", follow_ups=("/one", "https://example.com/two")),
                "https://example.com/one": page("one-a", "one-b", follow_ups=("/three",)),
                "https://example.com/two": page("two"),
                "https://example.com/three": page("three"),
            }
        )
        crawler = PaginatingCrawler(fetcher, MagicMock())

        text = await crawler.crawl(ListStrategy(), START, page_budget=1)

        assert text == "root\none-a\none-b\ntwo\nthree\n"
        assert "https://example.com/never" not in fetcher.calls

    @pytest.mark.asyncio
    async def test_empty_page_without_next_link_stops(self):
        fetcher = FakeFetcher({START: page()})
        crawler = PaginatingCrawler(fetcher, MagicMock())

        text = await crawler.crawl(UnboundedListStrategy(), START, page_budget=5)

        assert text == ""
        assert fetcher.calls == [START]

    @pytest.mark.asyncio
    async def test_empty_later_page_keeps_earlier_lines(self):
        fetcher = FakeFetcher(
            {
                START: page("a", "b", next_page="/list?page=2"),
                "https://example.com/list?page=2": page(),
            }
        )
        crawler = PaginatingCrawler(fetcher, MagicMock())

        text = await crawler.crawl(UnboundedListStrategy(), START)

        assert text == "a\nb\n"
        assert fetcher.calls == [START, "https://example.com/list?page=2"]

    @pytest.mark.asyncio
    async def test_next_link_back_to_crawled_page_stops(self):
        fetcher = FakeFetcher(
            {
                START: page("a", next_page="/list?page=2"),
                "https://example.com/list?page=2": page("b", next_page="/list"),
            }
        )
        crawler = PaginatingCrawler(fetcher, MagicMock())

        text = await crawler.crawl(UnboundedListStrategy(), START)

        assert text == "a\nb\n"
        assert fetcher.calls == [START, "https://example.com/list?page=2"]

    @pytest.mark.asyncio
    async def test_self_referencing_next_link_stops(self):
        fetcher = FakeFetcher({START: page("a", next_page=START)})
        crawler = PaginatingCrawler(fetcher, MagicMock())

        text = await crawler.crawl(UnboundedListStrategy(), START)

        assert text == "a\n"
        assert fetcher.calls == [START]

    @pytest.mark.asyncio
    async def test_leading_lines_come_first(self):
        fetcher = FakeFetcher({START: page("a")})
        crawler = PaginatingCrawler(fetcher, MagicMock())

        text = await crawler.crawl(ShuffledListStrategy(), START)

        assert text == "#shuffle\na\n"

    @pytest.mark.asyncio
    async def test_fetch_failure_aborts_crawl(self):
        fetcher = FakeFetcher({START: page("a", next_page="/missing")})
        crawler = PaginatingCrawler(fetcher, MagicMock())

        with pytest.raises(ScrapingError) as exc_info:
            await crawler.crawl(ListStrategy(), START, page_budget=3)

        assert exc_info.value.status_code == 404
        assert exc_info.value.url == "https://example.com/missing"

    @pytest.mark.asyncio
    async def test_observer_notified_per_page(self, linear_fetcher):
        observer = MagicMock()
        crawler = PaginatingCrawler(linear_fetcher, observer)

        await crawler.crawl(ListStrategy(), START, page_budget=2)

        assert observer.page_extracted.call_count == 2
        observer.page_extracted.assert_any_call(START, ["a", "b"])


class TestExtractionStrategy:
    """Test host matching."""

    def test_matches_domain_and_subdomains(self):
        strategy = ListStrategy()
        assert strategy.matches_host("example.com")
        assert strategy.matches_host("www.example.com")
        assert strategy.matches_host("WWW.EXAMPLE.COM.")
        assert not strategy.matches_host("notexample.com")
        assert not strategy.matches_host("example.org")


LASTFM_START = "https://www.last.fm/music/Air/+tracks?nb_tracks=1&nb_similar_artists=1&nb_similar_artists_tracks=1"
LASTFM_TRACK = "https://www.last.fm/music/Air/_/Sexy+Boy"
LASTFM_SIMILAR = (
    "https://www.last.fm/music/Air/+similar?nb_tracks=1&nb_similar_artists=1&nb_similar_artists_tracks=1"
)
LASTFM_PHOENIX = "https://www.last.fm/music/Phoenix/+tracks?nb_tracks=1"


class TestLastFmCrawl:
    """Test a branching Last.fm crawl end to end."""

    @pytest.fixture
    def lastfm_fetcher(self):
        """Artist chart, one track page, the similar-artists page and one similar artist."""
        return FakeFetcher(
            {
                LASTFM_START: """
                    <h1 class="header-new-title">Air</h1>
                    <table>
                      <tr><td class="chartlist-name"><a href="/music/Air/_/Sexy+Boy">Sexy Boy</a></td></tr>
                      <tr><td class="chartlist-name"><a href="/music/Air/_/Talisman">Talisman</a></td></tr>
                    </table>
                """,
                LASTFM_TRACK: """
                    <div class="track-similar-tracks-item">
                      <p class="track-similar-tracks-item-artist">Daft Punk</p>
                      <h3 class="track-similar-tracks-item-name">Digital Love</h3>
                    </div>
                """,
                LASTFM_SIMILAR: """
                    <h3 class="similar-artists-item-name"><a href="/music/Phoenix">Phoenix</a></h3>
                    <h3 class="similar-artists-item-name"><a href="/music/Justice">Justice</a></h3>
                """,
                LASTFM_PHOENIX: """
                    <h1 class="header-new-title">Phoenix</h1>
                    <table>
                      <tr><td class="chartlist-name">1901</td></tr>
                      <tr><td class="chartlist-name">Lisztomania</td></tr>
                    </table>
                """,
            }
        )

    @pytest.mark.asyncio
    async def test_similar_artists_and_tracks_are_explored(self, lastfm_fetcher):
        crawler = PaginatingCrawler(lastfm_fetcher, MagicMock())

        text = await crawler.crawl(LastFmStrategy(), LASTFM_START)

        assert text == "#shuffle\nAir\t-\tSexy Boy\nDaft Punk\t-\tDigital Love\nPhoenix\t-\t1901\n"
        assert lastfm_fetcher.calls == [LASTFM_START, LASTFM_TRACK, LASTFM_SIMILAR, LASTFM_PHOENIX]
