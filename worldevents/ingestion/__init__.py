"""RSS ingestion."""

from .exceptions import FetchError
from .models import Enclosure, FeedResult, RawFeedItem
from .rss_fetcher import RSSFetcher, build_client, to_raw_item

__all__ = [
    "RSSFetcher",
    "FetchError",
    "Enclosure",
    "FeedResult",
    "RawFeedItem",
    "build_client",
    "to_raw_item",
]
