"""Core data models for the trending news aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Article:
    """A feed entry normalized into the shape served to clients."""

    title: str
    link: str
    pubDate: str
    channel: str
    contentSnippet: str
    categories: List[str] = field(default_factory=list)
    image: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "title": self.title,
            "link": self.link,
            "pubDate": self.pubDate,
            "channel": self.channel,
            "contentSnippet": self.contentSnippet,
            "categories": list(self.categories),
        }
        if self.image is not None:
            payload["image"] = self.image
        return payload


AggregationResult = Dict[str, List[Article]]


@dataclass
class AggregationReport:
    """Per-source outcome of an aggregation that isolates failures."""

    feeds: AggregationResult = field(default_factory=dict)
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "feeds": {
                name: [article.to_dict() for article in articles]
                for name, articles in self.feeds.items()
            }
        }
        if self.errors:
            payload["errors"] = dict(self.errors)
        return payload


def result_to_dict(result: AggregationResult) -> Dict[str, Any]:
    return {
        "feeds": {
            name: [article.to_dict() for article in articles]
            for name, articles in result.items()
        }
    }


__all__ = ["AggregationReport", "AggregationResult", "Article", "result_to_dict"]
