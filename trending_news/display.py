"""Rich terminal rendering of aggregation results."""

from __future__ import annotations

from typing import Dict, Optional

from dateutil import parser as dtparse
from rich.console import Console
from rich.table import Table

from .models import AggregationResult

MAX_CATEGORIES = 3


def format_date(value: Optional[str]) -> str:
    """Render a feed date as ``Jun 7, 2025, 9:55 AM``; unparsable input is returned as-is."""

    if not value:
        return ""
    try:
        parsed = dtparse.parse(value)
    except (ValueError, OverflowError):
        return value
    hour = parsed.hour % 12 or 12
    return f"{parsed:%b} {parsed.day}, {parsed.year}, {hour}:{parsed:%M %p}"


def render_feeds(
    console: Console,
    feeds: AggregationResult,
    errors: Optional[Dict[str, str]] = None,
) -> None:
    if not feeds and not errors:
        console.print("[yellow]No sources available.[/yellow]")
        return

    for name, articles in feeds.items():
        table = Table(title=f"{name} ({len(articles)})", title_justify="left", expand=True)
        table.add_column("Title", ratio=3)
        table.add_column("Channel", ratio=1)
        table.add_column("Categories", ratio=1)
        table.add_column("Published", no_wrap=True)
        table.add_column("Link", ratio=2, overflow="fold")
        for article in articles:
            table.add_row(
                article.title,
                article.channel,
                ", ".join(str(category) for category in article.categories[:MAX_CATEGORIES]),
                format_date(article.pubDate),
                article.link,
            )
        console.print(table)

    for name, message in (errors or {}).items():
        console.print(f"[red]{name} failed:[/red] {message}")


__all__ = ["format_date", "render_feeds"]
