"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Union
from xml.sax.saxutils import escape

import httpx
import pytest

from trending_news.config import FeedSource, FetcherConfig
from trending_news.fetching import FeedFetcher

Route = Union[bytes, str, int, Exception]


def make_item(
    title: str,
    link: Optional[str] = None,
    pub_date: Optional[str] = None,
    description: Optional[str] = None,
    content: Optional[str] = None,
    creator: Optional[str] = None,
    categories: Iterable[str] = (),
) -> str:
    parts = [f"<title>{escape(title)}</title>"]
    if link:
        parts.append(f"<link>{escape(link)}</link>")
    if pub_date:
        parts.append(f"<pubDate>{pub_date}</pubDate>")
    if description is not None:
        parts.append(f"<description><![CDATA[{description}]]></description>")
    if content is not None:
        parts.append(f"<content:encoded><![CDATA[{content}]]></content:encoded>")
    if creator:
        parts.append(f"<dc:creator>{escape(creator)}</dc:creator>")
    for category in categories:
        parts.append(f"<category>{escape(category)}</category>")
    return "<item>" + "".join(parts) + "</item>"


def make_rss(
    items: Iterable[str],
    title: Optional[str] = "Example Feed",
    description: Optional[str] = None,
    image_url: Optional[str] = None,
) -> str:
    channel = []
    if title:
        channel.append(f"<title>{escape(title)}</title>")
    channel.append("<link>https://example.com/</link>")
    if description is not None:
        channel.append(f"<description><![CDATA[{description}]]></description>")
    if image_url:
        channel.append(
            "<image>"
            f"<url>{escape(image_url)}</url><title>logo</title><link>https://example.com/</link>"
            "</image>"
        )
    channel.extend(items)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0" '
        'xmlns:content="http://purl.org/rss/1.0/modules/content/" '
        'xmlns:dc="http://purl.org/dc/elements/1.1/">'
        "<channel>" + "".join(channel) + "</channel></rss>"
    )


def numbered_feed(name: str, count: int) -> str:
    return make_rss(
        [
            make_item(
                f"{name} story {index}",
                link=f"https://{name.lower()}.example.com/{index}",
                pub_date="Tue, 17 Jun 2025 10:55:19 +0000",
                description=f"<p>Body of story {index}</p>",
            )
            for index in range(1, count + 1)
        ],
        title=f"{name} Channel",
    )


def truncated_feed(name: str, count: int, cut: int = 400) -> str:
    """A feed body cut off before its closing tags."""

    return numbered_feed(name, count)[:-cut]


def route_transport(routes: Dict[str, Route]) -> httpx.MockTransport:
    """Serve canned responses keyed by URL.

    A value may be a feed body, an HTTP status code, or an exception to raise.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        outcome = routes.get(str(request.url))
        if outcome is None:
            return httpx.Response(404, text="not found")
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, int):
            return httpx.Response(outcome, text="upstream error")
        return httpx.Response(
            200,
            content=outcome.encode("utf-8") if isinstance(outcome, str) else outcome,
            headers={"content-type": "application/rss+xml; charset=utf-8"},
        )

    return httpx.MockTransport(handler)


@pytest.fixture
def make_fetcher():
    """Build a FeedFetcher whose HTTP traffic is served from a routing table."""

    created = []

    def _factory(routes: Dict[str, Route]) -> FeedFetcher:
        fetcher = FeedFetcher(FetcherConfig(timeout=5), transport=route_transport(routes))
        created.append(fetcher)
        return fetcher

    yield _factory
    for fetcher in created:
        fetcher.close()


@pytest.fixture
def two_sources():
    return (
        FeedSource("A", "https://a.example.com/feed"),
        FeedSource("B", "https://b.example.com/feed"),
    )
