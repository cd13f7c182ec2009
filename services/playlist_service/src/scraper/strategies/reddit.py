"""
Reddit extraction strategy.

Handles post listings (post titles) and comment threads. Comments are read
with a few heuristics, in order:

1. if a comment has links, their texts are probably song names;
2. if it has several sentences, the song is the first one;
3. if it has several lines, the song is on the first line and the rest is
   commentary;
4. otherwise the whole comment is taken.
"""

from bs4 import BeautifulSoup, Tag

from ..crawler import ExtractionStrategy, PageExtraction
from ..text import looks_like_url, strip_noise


def comment_candidates(comment: Tag) -> list[str]:
    """Candidate track texts from a single comment body."""
    links = comment.select("a")
    if links:
        return [link.get_text() for link in links if not looks_like_url(link.get_text())]

    body = comment.get_text()
    sentences = body.split(".")
    if len(sentences) > 1:
        return [sentences[0]]
    body_lines = body.strip().split("\n")
    if len(body_lines) > 1:
        return [body_lines[0]]
    return [body]


class RedditStrategy(ExtractionStrategy):
    """Track candidates from subreddit listings and comment threads."""

    name = "reddit"
    domains = ("reddit.com",)
    default_page_budget = 1

    def extract_page(self, document: BeautifulSoup, page_uri: str, start_uri: str) -> PageExtraction:
        if "/comments/" in start_uri.lower():
            candidates = [
                text for comment in document.select("div.entry div.md") for text in comment_candidates(comment)
            ]
        else:
            candidates = [anchor.get_text() for anchor in document.select("a.title")]

        page = PageExtraction(lines=[line for line in map(strip_noise, candidates) if line])

        anchor = document.select_one(".next-button a")
        href = anchor.get("href") if anchor else None
        if isinstance(href, str) and href.strip():
            page.next_page = href.strip()

        return page
