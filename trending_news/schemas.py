"""Pydantic schemas for response payloads."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .config import FeedSource
from .models import AggregationResult, Article


class ArticleResponse(BaseModel):
    title: str
    link: str
    pubDate: str = Field("", description="Publish date exactly as the feed provides it")
    channel: str = Field(..., description="Author, feed title, or source name")
    contentSnippet: str
    categories: List[str] = Field(default_factory=list)
    image: Optional[str] = Field(None, description="Best-effort image URL")

    @classmethod
    def from_article(cls, article: Article) -> "ArticleResponse":
        return cls(
            title=article.title,
            link=article.link,
            pubDate=article.pubDate,
            channel=article.channel,
            contentSnippet=article.contentSnippet,
            categories=[str(category) for category in article.categories],
            image=article.image,
        )


class TrendingResponse(BaseModel):
    feeds: Dict[str, List[ArticleResponse]] = Field(
        ..., description="Source name mapped to at most ten articles, in feed order"
    )
    errors: Optional[Dict[str, str]] = Field(
        None, description="Sources that failed, only reported when failures are isolated"
    )

    @classmethod
    def from_result(
        cls,
        feeds: AggregationResult,
        errors: Optional[Dict[str, str]] = None,
    ) -> "TrendingResponse":
        return cls(
            feeds={
                name: [ArticleResponse.from_article(article) for article in articles]
                for name, articles in feeds.items()
            },
            errors=errors or None,
        )


class ErrorResponse(BaseModel):
    error: str


class SourceResponse(BaseModel):
    name: str
    url: str

    @classmethod
    def from_source(cls, source: FeedSource) -> "SourceResponse":
        return cls(name=source.name, url=source.url)


__all__ = ["ArticleResponse", "ErrorResponse", "SourceResponse", "TrendingResponse"]
