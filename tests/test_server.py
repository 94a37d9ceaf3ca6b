"""Tests for the HTTP layer."""

from fastapi.testclient import TestClient

from conftest import make_item, make_rss, numbered_feed, truncated_feed
from trending_news.server import create_app
from trending_news.service import FeedAggregator


def client_for(aggregator, fail_fast=True):
    return TestClient(create_app(aggregator, fail_fast=fail_fast))


class TestTrendingEndpoint:
    """GET /api/trending."""

    def test_success_payload(self, make_fetcher, two_sources):
        a, b = two_sources
        fetcher = make_fetcher({a.url: numbered_feed("A", 12), b.url: numbered_feed("B", 3)})
        response = client_for(FeedAggregator(two_sources, fetcher)).get("/api/trending")

        assert response.status_code == 200
        body = response.json()
        assert list(body) == ["feeds"]
        assert list(body["feeds"]) == ["A", "B"]
        assert len(body["feeds"]["A"]) == 10
        assert len(body["feeds"]["B"]) == 3
        first = body["feeds"]["A"][0]
        assert first["title"] == "A story 1"
        assert first["pubDate"] == "Tue, 17 Jun 2025 10:55:19 +0000"
        assert first["channel"] == "A Channel"
        assert first["contentSnippet"] == "Body of story 1..."
        assert first["categories"] == []
        assert "image" not in first

    def test_image_and_categories_serialized(self, make_fetcher, two_sources):
        a, b = two_sources
        feed = make_rss(
            [
                make_item(
                    "Pictured",
                    description='<img src="https://img.example/p.jpg"> caption',
                    categories=["Tech"],
                )
            ]
        )
        fetcher = make_fetcher({a.url: feed, b.url: make_rss([])})
        body = client_for(FeedAggregator(two_sources, fetcher)).get("/api/trending").json()
        [article] = body["feeds"]["A"]
        assert article["image"] == "https://img.example/p.jpg"
        assert article["categories"] == ["Tech"]
        assert body["feeds"]["B"] == []

    def test_single_failure_is_a_500(self, make_fetcher, two_sources):
        """Any failing source turns the whole response into an error."""
        a, b = two_sources
        fetcher = make_fetcher({a.url: numbered_feed("A", 3), b.url: 503})
        response = client_for(FeedAggregator(two_sources, fetcher)).get("/api/trending")

        assert response.status_code == 500
        body = response.json()
        assert list(body) == ["error"]
        assert body["error"].startswith("B: ")
        assert "503" in body["error"]

    def test_truncated_feed_is_a_500(self, make_fetcher, two_sources):
        a, b = two_sources
        fetcher = make_fetcher({a.url: truncated_feed("A", 5), b.url: numbered_feed("B", 2)})
        response = client_for(FeedAggregator(two_sources, fetcher)).get("/api/trending")

        assert response.status_code == 500
        assert response.json()["error"].startswith("A: malformed feed")

    def test_isolated_mode_reports_errors(self, make_fetcher, two_sources):
        a, b = two_sources
        fetcher = make_fetcher({a.url: numbered_feed("A", 3), b.url: 503})
        response = client_for(FeedAggregator(two_sources, fetcher), fail_fast=False).get(
            "/api/trending"
        )

        assert response.status_code == 200
        body = response.json()
        assert list(body["feeds"]) == ["A"]
        assert "503" in body["errors"]["B"]

    def test_isolated_mode_all_failed(self, make_fetcher, two_sources):
        a, b = two_sources
        fetcher = make_fetcher({a.url: 500, b.url: "garbage"})
        response = client_for(FeedAggregator(two_sources, fetcher), fail_fast=False).get(
            "/api/trending"
        )
        assert response.status_code == 500
        assert "error" in response.json()

    def test_isolated_mode_without_failures_omits_errors(self, make_fetcher, two_sources):
        a, b = two_sources
        fetcher = make_fetcher({a.url: numbered_feed("A", 1), b.url: numbered_feed("B", 1)})
        body = (
            client_for(FeedAggregator(two_sources, fetcher), fail_fast=False)
            .get("/api/trending")
            .json()
        )
        assert list(body) == ["feeds"]


class TestAuxiliaryEndpoints:
    """Health check and source listing."""

    def test_healthz(self, make_fetcher, two_sources):
        response = client_for(FeedAggregator(two_sources, make_fetcher({}))).get("/healthz")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_sources_listed_in_order(self, make_fetcher, two_sources):
        response = client_for(FeedAggregator(two_sources, make_fetcher({}))).get("/api/sources")
        assert response.json() == [
            {"name": "A", "url": "https://a.example.com/feed"},
            {"name": "B", "url": "https://b.example.com/feed"},
        ]
