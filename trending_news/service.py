"""Core feed aggregation service."""

from __future__ import annotations

import concurrent.futures as futures
import logging
import time
from typing import TYPE_CHECKING, Callable, Iterator, List, Optional, Sequence, Tuple

from .config import FeedSource, ensure_unique_names
from .fetching import FeedError, FeedFetcher
from .models import AggregationReport, AggregationResult, Article
from .normalization import MAX_ARTICLES_PER_SOURCE, normalize_feed

if TYPE_CHECKING:
    from .progress import StageHandle

LOGGER = logging.getLogger(__name__)


class FeedAggregator:
    """Fetch every configured feed and normalize its newest entries.

    Stateless: each call re-fetches all sources. Output is keyed by source
    name in configured order, and each list keeps the feed's own entry order.
    """

    def __init__(
        self,
        sources: Sequence[FeedSource],
        fetcher: FeedFetcher,
        *,
        max_articles: int = MAX_ARTICLES_PER_SOURCE,
        concurrency: int = 1,
    ) -> None:
        ensure_unique_names(sources)
        if max_articles < 0:
            raise ValueError("max_articles must not be negative")
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.sources: Tuple[FeedSource, ...] = tuple(sources)
        self.fetcher = fetcher
        self.max_articles = max_articles
        self.concurrency = concurrency

    def collect(self, source: FeedSource) -> List[Article]:
        """Fetch one source and return its normalized articles."""

        parsed = self.fetcher.fetch(source)
        articles = normalize_feed(parsed, source.name, limit=self.max_articles)
        LOGGER.info("Collected %d articles from %s", len(articles), source.name)
        return articles

    def aggregate(self, stage: Optional["StageHandle"] = None) -> AggregationResult:
        """Collect every source; the first failure aborts the whole batch."""

        LOGGER.info("Aggregating %d feed sources", len(self.sources))
        start = time.time()
        results: AggregationResult = {}
        for source, articles in self._run(self.collect, stage):
            results[source.name] = articles
        LOGGER.info(
            "Aggregated %d articles in %.2fs",
            sum(len(items) for items in results.values()),
            time.time() - start,
        )
        return results

    def aggregate_report(self, stage: Optional["StageHandle"] = None) -> AggregationReport:
        """Collect every source, recording failures instead of raising them."""

        LOGGER.info("Aggregating %d feed sources (isolated)", len(self.sources))
        report = AggregationReport()
        for source, outcome in self._run(self._collect_isolated, stage):
            if isinstance(outcome, FeedError):
                report.errors[source.name] = str(outcome)
            else:
                report.feeds[source.name] = outcome
        if report.errors:
            LOGGER.warning(
                "%d of %d feed sources failed: %s",
                len(report.errors),
                len(self.sources),
                ", ".join(report.errors),
            )
        return report

    def _collect_isolated(self, source: FeedSource):
        try:
            return self.collect(source)
        except FeedError as exc:
            LOGGER.warning("Skipping feed source %s: %s", source.name, exc)
            return exc

    def _run(
        self,
        task: Callable[[FeedSource], object],
        stage: Optional["StageHandle"],
    ) -> Iterator[Tuple[FeedSource, object]]:
        if stage is not None:
            stage.set_total(len(self.sources))

        if self.concurrency == 1 or len(self.sources) < 2:
            for source in self.sources:
                outcome = task(source)
                if stage is not None:
                    stage.advance(1)
                yield source, outcome
            return

        workers = min(self.concurrency, len(self.sources))
        with futures.ThreadPoolExecutor(max_workers=workers) as pool:
            pending = [pool.submit(task, source) for source in self.sources]
            try:
                for source, future in zip(self.sources, pending):
                    outcome = future.result()
                    if stage is not None:
                        stage.advance(1)
                    yield source, outcome
            finally:
                for future in pending:
                    future.cancel()


__all__ = ["FeedAggregator"]
