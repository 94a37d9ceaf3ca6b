"""Configuration helpers for the trending news service."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple


@dataclass(frozen=True)
class FeedSource:
    """A named syndication endpoint polled by the aggregator."""

    name: str
    url: str


DEFAULT_SOURCES: Tuple[FeedSource, ...] = (
    FeedSource("Google News", "https://news.google.com/rss?hl=en-US&gl=US&ceid=US:en"),
    FeedSource("TechCrunch", "https://techcrunch.com/feed/"),
    FeedSource("BBC World", "http://feeds.bbci.co.uk/news/world/rss.xml"),
    FeedSource("Hacker News", "https://hnrss.org/frontpage"),
    FeedSource("The Verge", "https://www.theverge.com/rss/index.xml"),
    FeedSource("Wired", "https://www.wired.com/feed/rss"),
    FeedSource("Engadget", "https://www.engadget.com/rss.xml"),
    FeedSource("Kaundal VIP", "https://kaundal.vip/feed/"),
)


@dataclass
class FetcherConfig:
    """Configuration for the feed fetcher."""

    timeout: float = 15.0
    user_agent: str = "trending-news/1.0"


@dataclass
class AggregatorConfig:
    """Top-level configuration for the service."""

    sources: Tuple[FeedSource, ...] = DEFAULT_SOURCES
    fetcher: FetcherConfig = field(default_factory=FetcherConfig)
    concurrency: int = 1
    fail_fast: bool = True
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    @property
    def source_names(self) -> List[str]:
        return [source.name for source in self.sources]


def load_sources(path: Path) -> Tuple[FeedSource, ...]:
    """Read a JSON list of ``{"name": ..., "url": ...}`` objects."""

    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"sources file must contain a JSON list: {path}")
    sources: List[FeedSource] = []
    for position, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ValueError(f"source #{position} in {path} is not an object")
        name = str(entry.get("name") or "").strip()
        url = str(entry.get("url") or "").strip()
        if not name or not url:
            raise ValueError(f"source #{position} in {path} needs both 'name' and 'url'")
        sources.append(FeedSource(name=name, url=url))
    return tuple(sources)


def ensure_unique_names(sources: Sequence[FeedSource]) -> None:
    seen = set()
    for source in sources:
        if source.name in seen:
            raise ValueError(f"duplicate feed source name: {source.name!r}")
        seen.add(source.name)


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"{name} must be a boolean flag, got {value!r}")


def load_config() -> AggregatorConfig:
    """Load configuration from environment variables with sensible defaults."""

    sources_path_env = os.getenv("TRENDING_SOURCES_PATH")
    sources: Tuple[FeedSource, ...]
    if sources_path_env:
        sources_path = Path(sources_path_env).expanduser()
        if not sources_path.exists():
            raise FileNotFoundError(f"sources file not found: {sources_path}")
        sources = load_sources(sources_path)
    else:
        sources = DEFAULT_SOURCES
    ensure_unique_names(sources)

    timeout = float(os.getenv("TRENDING_FETCH_TIMEOUT", "15"))
    if timeout <= 0:
        raise ValueError("TRENDING_FETCH_TIMEOUT must be positive")
    user_agent = os.getenv("TRENDING_USER_AGENT", "trending-news/1.0")
    concurrency = int(os.getenv("TRENDING_CONCURRENCY", "1"))
    if concurrency < 1:
        raise ValueError("TRENDING_CONCURRENCY must be at least 1")
    fail_fast = _env_flag("TRENDING_FAIL_FAST", True)
    api_host = os.getenv("API_HOST", "0.0.0.0")
    api_port = int(os.getenv("PORT", "8080"))

    fetcher = FetcherConfig(timeout=timeout, user_agent=user_agent)

    return AggregatorConfig(
        sources=sources,
        fetcher=fetcher,
        concurrency=concurrency,
        fail_fast=fail_fast,
        api_host=api_host,
        api_port=api_port,
    )


def source_from_name(config: AggregatorConfig, name: str) -> Optional[FeedSource]:
    for source in config.sources:
        if source.name == name:
            return source
    return None


__all__ = [
    "AggregatorConfig",
    "DEFAULT_SOURCES",
    "FeedSource",
    "FetcherConfig",
    "ensure_unique_names",
    "load_config",
    "load_sources",
    "source_from_name",
]
