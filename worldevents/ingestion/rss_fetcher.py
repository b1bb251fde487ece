"""RSS/Atom feed fetcher."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

import feedparser
import httpx
from bs4 import BeautifulSoup

from ..config import FetchConfig
from .exceptions import FetchError
from .models import Enclosure, RawFeedItem

logger = logging.getLogger(__name__)


def build_client(config: Optional[FetchConfig] = None) -> httpx.AsyncClient:
    """Create the HTTP client feeds are fetched with.

    The caller owns the client and must close it.
    """
    config = config or FetchConfig()
    return httpx.AsyncClient(
        headers={"User-Agent": config.user_agent},
        timeout=config.timeout,
        follow_redirects=True,
    )


def _html_to_text(value: Optional[str]) -> Optional[str]:
    """Strip markup from an HTML fragment."""
    if not value:
        return None
    if "<" not in value:
        return value
    return BeautifulSoup(value, "html.parser").get_text(" ")


def _iso_date(entry: Mapping[str, Any]) -> Optional[str]:
    """Render feedparser's parsed published/updated time as ISO-8601."""
    for key in ("published_parsed", "updated_parsed"):
        parsed = entry.get(key)
        if parsed:
            try:
                return datetime(*parsed[:6], tzinfo=timezone.utc).isoformat()
            except (TypeError, ValueError):
                continue
    return None


def _enclosure(entry: Mapping[str, Any]) -> Optional[Enclosure]:
    for enclosure in entry.get("enclosures") or []:
        if isinstance(enclosure, Mapping):
            return Enclosure(
                url=enclosure.get("href") or enclosure.get("url"),
                type=enclosure.get("type"),
                length=str(enclosure["length"]) if enclosure.get("length") else None,
            )
    return None


def to_raw_item(entry: Mapping[str, Any]) -> RawFeedItem:
    """Map a feedparser entry to a RawFeedItem."""
    summary = entry.get("summary")
    contents = entry.get("content") or []
    content = None
    if contents and isinstance(contents[0], Mapping):
        content = contents[0].get("value")

    media = entry.get("media_content") or []

    return RawFeedItem(
        link=entry.get("link"),
        title=entry.get("title"),
        iso_date=_iso_date(entry),
        pub_date=entry.get("published") or entry.get("updated"),
        content_snippet=_html_to_text(summary or content),
        content=content or summary,
        enclosure=_enclosure(entry),
        media_content=[dict(m) for m in media if isinstance(m, Mapping)],
    )


class RSSFetcher:
    """Fetch and parse RSS feeds."""

    def __init__(self, client: httpx.AsyncClient, timeout: Optional[float] = 15.0) -> None:
        """
        Initialize RSS fetcher.

        Args:
            client: Caller-owned HTTP client
            timeout: Deadline in seconds for one whole fetch, None for none
        """
        self.client = client
        self.timeout = timeout

    async def fetch_feed(self, url: str) -> List[RawFeedItem]:
        """Fetch and parse a single feed.

        Raises FetchError on network, HTTP status or parse failures, or when
        the whole fetch takes longer than the deadline.
        """
        try:
            return await asyncio.wait_for(self._fetch_feed(url), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise FetchError(url, f"Timed out after {self.timeout}s") from e

    async def _fetch_feed(self, url: str) -> List[RawFeedItem]:
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise FetchError(url, f"Timed out ({e.__class__.__name__})") from e
        except httpx.HTTPStatusError as e:
            raise FetchError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FetchError(url, f"HTTP error ({e})") from e

        content_type = response.headers.get("content-type")
        feed = feedparser.parse(
            response.content,
            response_headers={"content-type": content_type} if content_type else None,
        )

        entries = feed.get("entries") or []
        if feed.get("bozo"):
            if not entries:
                raise FetchError(url, f"Invalid RSS feed ({feed.get('bozo_exception')})")
            logger.warning("Feed %s is malformed but has entries: %s", url, feed.get("bozo_exception"))

        return [to_raw_item(entry) for entry in entries]
