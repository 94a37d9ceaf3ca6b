"""Command-line helper that writes one aggregation run to a JSON file."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Sequence

from trending_news.config import load_config
from trending_news.fetching import FeedFetcher
from trending_news.models import result_to_dict
from trending_news.service import FeedAggregator


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dump trending news feeds to JSON")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("trending.json"),
        help="Where to write the payload. Defaults to ./trending.json.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    config = load_config()
    with FeedFetcher(config.fetcher) as fetcher:
        aggregator = FeedAggregator(config.sources, fetcher, concurrency=config.concurrency)
        feeds = aggregator.aggregate()

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(
        json.dumps(result_to_dict(feeds), ensure_ascii=False, indent=2), encoding="utf-8"
    )
    total = sum(len(articles) for articles in feeds.values())
    print(f"Wrote {total} articles from {len(feeds)} sources.")
    print(f"Output file: {args.output}")


if __name__ == "__main__":  # pragma: no cover
    main()
