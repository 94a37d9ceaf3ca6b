"""Trending news feed aggregator package."""

from .config import AggregatorConfig, FeedSource, FetcherConfig, load_config
from .fetching import FeedError, FeedFetcher, FeedFetchError, FeedParseError
from .models import AggregationReport, Article
from .service import FeedAggregator

__all__ = [
    "AggregationReport",
    "AggregatorConfig",
    "Article",
    "FeedAggregator",
    "FeedError",
    "FeedFetchError",
    "FeedFetcher",
    "FeedParseError",
    "FeedSource",
    "FetcherConfig",
    "load_config",
]
