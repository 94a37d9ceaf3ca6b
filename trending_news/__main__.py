"""Entrypoint for running the trending news service."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import Optional, Sequence

import uvicorn
from rich.console import Console

from .config import AggregatorConfig, load_config, source_from_name
from .display import render_feeds
from .fetching import FeedError, FeedFetcher
from .models import result_to_dict
from .progress import AggregationProgress
from .server import create_app
from .service import FeedAggregator


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="trending_news",
        description="Aggregate trending news from RSS/Atom feeds",
    )
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the HTTP API (default)")
    serve.add_argument("--host", help="Bind host, defaults to $API_HOST or 0.0.0.0")
    serve.add_argument("--port", type=int, help="Bind port, defaults to $PORT or 8080")

    fetch = subparsers.add_parser("fetch", help="Aggregate once and print the result")
    fetch.add_argument("--json", action="store_true", help="Print the JSON payload")
    fetch.add_argument(
        "--isolated",
        action="store_true",
        help="Keep going when a source fails and report it separately",
    )
    fetch.add_argument(
        "--source",
        action="append",
        default=[],
        metavar="NAME",
        help="Only fetch the named source (repeatable)",
    )
    return parser.parse_args(argv)


def _select_sources(config: AggregatorConfig, names: Sequence[str]) -> AggregatorConfig:
    if not names:
        return config
    selected = []
    for name in names:
        source = source_from_name(config, name)
        if source is None:
            raise SystemExit(
                f"Unknown source {name!r}. Available: {', '.join(config.source_names)}"
            )
        selected.append(source)
    return replace(config, sources=tuple(selected))


def _build_aggregator(config: AggregatorConfig) -> FeedAggregator:
    fetcher = FeedFetcher(config.fetcher)
    return FeedAggregator(config.sources, fetcher, concurrency=config.concurrency)


def serve(config: AggregatorConfig, host: Optional[str], port: Optional[int]) -> None:
    aggregator = _build_aggregator(config)
    app = create_app(aggregator, fail_fast=config.fail_fast)
    host = host or config.api_host
    port = port or config.api_port
    logging.info(
        "Serving %d feed sources on %s:%s (fail_fast=%s)",
        len(config.sources),
        host,
        port,
        config.fail_fast,
    )
    try:
        uvicorn.run(app, host=host, port=port)
    finally:
        aggregator.fetcher.close()


def fetch(config: AggregatorConfig, as_json: bool, isolated: bool) -> int:
    aggregator = _build_aggregator(config)
    console = Console()
    try:
        with AggregationProgress() as progress:
            stage = progress.stage("Fetching feeds")
            if isolated:
                report = aggregator.aggregate_report(stage=stage)
                feeds, errors = report.feeds, report.errors
                payload = report.to_dict()
            else:
                feeds, errors = aggregator.aggregate(stage=stage), {}
                payload = result_to_dict(feeds)
    except FeedError as exc:
        logging.error("Aggregation aborted: %s", exc)
        if as_json:
            print(json.dumps({"error": str(exc)}, ensure_ascii=False))
        return 1
    finally:
        aggregator.fetcher.close()

    if as_json:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        render_feeds(console, feeds, errors)
    return 1 if errors else 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = parse_args(argv)
    config = load_config()

    if args.command == "fetch":
        config = _select_sources(config, args.source)
        sys.exit(fetch(config, args.json, args.isolated))

    serve(config, getattr(args, "host", None), getattr(args, "port", None))


if __name__ == "__main__":  # pragma: no cover
    main()
