"""Feed download and parsing for the trending news aggregator."""

from __future__ import annotations

import io
import logging
import time
from typing import Optional
from xml.sax import SAXException

import feedparser
import httpx

from .config import FeedSource, FetcherConfig

LOGGER = logging.getLogger(__name__)


class FeedError(RuntimeError):
    """Raised when a configured feed cannot be turned into entries."""

    def __init__(self, source: FeedSource, message: str) -> None:
        super().__init__(f"{source.name}: {message}")
        self.source = source
        self.url = source.url


class FeedFetchError(FeedError):
    """Network failure or non-success HTTP status from the feed origin."""


class FeedParseError(FeedError):
    """The response body is not a feed feedparser recognizes."""


class FeedFetcher:
    """Download feeds over HTTP and parse them with feedparser."""

    def __init__(
        self,
        config: FetcherConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = config
        self._client = httpx.Client(
            timeout=config.timeout,
            headers={"User-Agent": config.user_agent},
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "FeedFetcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def fetch(self, source: FeedSource) -> feedparser.FeedParserDict:
        """Fetch ``source`` and return the parsed feed document."""

        start = time.time()
        try:
            response = self._client.get(source.url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FeedFetchError(
                source,
                f"HTTP {exc.response.status_code} from {source.url}",
            ) from exc
        except httpx.HTTPError as exc:
            raise FeedFetchError(source, f"request to {source.url} failed: {exc}") from exc

        parsed = feedparser.parse(
            io.BytesIO(response.content),
            response_headers={
                "content-type": response.headers.get("content-type", ""),
                "content-location": str(response.url),
            },
        )
        if not parsed.get("version"):
            reason = parsed.get("bozo_exception")
            detail = f": {reason}" if reason else ""
            raise FeedParseError(source, f"unrecognized feed format at {source.url}{detail}")
        # the lenient parser still recovers entries from broken XML
        if parsed.get("bozo") and isinstance(parsed.get("bozo_exception"), SAXException):
            raise FeedParseError(
                source,
                f"malformed feed at {source.url}: {parsed.get('bozo_exception')}",
            )

        LOGGER.debug(
            "Fetched %s (%s, %d entries) in %.2fs",
            source.url,
            parsed.get("version"),
            len(parsed.get("entries") or []),
            time.time() - start,
        )
        return parsed


__all__ = ["FeedError", "FeedFetchError", "FeedFetcher", "FeedParseError"]
