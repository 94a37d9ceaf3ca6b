"""Map loosely typed feed entries onto :class:`~trending_news.models.Article`.

Entries come straight from ``feedparser`` (or any mapping with the same keys),
so every field is optional and some of them change shape between dialects.
All of that is absorbed here.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from .extraction import extract_image, make_snippet, normalize_categories
from .models import Article

MAX_ARTICLES_PER_SOURCE = 10


def _text(mapping: Mapping[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = mapping.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def _full_content(entry: Mapping[str, Any]) -> Optional[str]:
    # feedparser stores content:encoded as a list of {"value": ...} blocks
    content = entry.get("content")
    if isinstance(content, str):
        return content or None
    if isinstance(content, (list, tuple)):
        for block in content:
            if isinstance(block, Mapping):
                value = block.get("value")
                if value:
                    return value
    return None


def channel_image(feed: Mapping[str, Any]) -> Optional[str]:
    """Feed-level image used when an entry carries none of its own."""

    image = feed.get("image")
    if isinstance(image, Mapping):
        url = _text(image, "href", "url")
        if url:
            return url
    return extract_image(_text(feed, "subtitle", "description"))


def resolve_description(entry: Mapping[str, Any]) -> str:
    return _full_content(entry) or _text(entry, "summary") or _text(entry, "description") or ""


def entry_categories(entry: Mapping[str, Any]) -> List[str]:
    tags = entry.get("tags")
    if isinstance(tags, (list, tuple)):
        terms = []
        for tag in tags:
            term = tag.get("term") if isinstance(tag, Mapping) else tag
            if term:
                terms.append(term)
        return terms
    return normalize_categories(entry.get("categories"))


def entry_channel(entry: Mapping[str, Any], feed: Mapping[str, Any], source_name: str) -> str:
    return (
        _text(entry, "author", "creator", "dc_creator")
        or _text(feed, "title")
        or source_name
    )


def normalize_entry(
    entry: Mapping[str, Any],
    feed: Mapping[str, Any],
    source_name: str,
    fallback_image: Optional[str] = None,
) -> Article:
    description = resolve_description(entry)
    image = (
        extract_image(description)
        or extract_image(_text(entry, "summary"))
        or fallback_image
    )
    return Article(
        title=_text(entry, "title") or "",
        link=_text(entry, "link") or "",
        pubDate=_text(entry, "published", "pubDate", "updated") or "",
        channel=entry_channel(entry, feed, source_name),
        contentSnippet=make_snippet(description),
        categories=entry_categories(entry),
        image=image,
    )


def normalize_feed(
    parsed: Mapping[str, Any],
    source_name: str,
    limit: int = MAX_ARTICLES_PER_SOURCE,
) -> List[Article]:
    """Normalize the first ``limit`` entries of a parsed feed, in feed order."""

    feed = parsed.get("feed") or {}
    entries = parsed.get("entries") or []
    fallback_image = channel_image(feed)
    return [
        normalize_entry(entry, feed, source_name, fallback_image)
        for entry in list(entries)[:limit]
    ]


__all__ = [
    "MAX_ARTICLES_PER_SOURCE",
    "channel_image",
    "entry_categories",
    "entry_channel",
    "normalize_entry",
    "normalize_feed",
    "resolve_description",
]
