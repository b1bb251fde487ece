from typing import Dict, List, Union

import pytest

from worldevents.config import SourceConfig
from worldevents.ingestion import FetchError, RawFeedItem


class FakeFetcher:
    """Serves canned items per feed URL; exceptions are raised instead."""

    def __init__(self, feeds: Dict[str, Union[List[RawFeedItem], Exception]]) -> None:
        self.feeds = feeds
        self.calls: List[str] = []

    async def fetch_feed(self, url: str) -> List[RawFeedItem]:
        self.calls.append(url)
        result = self.feeds.get(url, [])
        if isinstance(result, Exception):
            raise result
        return result


def make_source(source_id: str, regions: List[str], **overrides) -> SourceConfig:
    base = {
        "id": source_id,
        "name": source_id.upper(),
        "homepage": f"https://{source_id}.example.com",
        "feed": f"https://{source_id}.example.com/rss",
        "regions": regions,
    }
    base.update(overrides)
    return SourceConfig(**base)


def make_item(**overrides) -> RawFeedItem:
    base = {
        "title": "Headline",
        "link": "https://news.example.com/1",
        "iso_date": "2024-01-01T00:00:00Z",
    }
    base.update(overrides)
    return RawFeedItem(**base)


@pytest.fixture
def europe_source() -> SourceConfig:
    return make_source("s1", ["europe"])


@pytest.fixture
def asia_source() -> SourceConfig:
    return make_source("s2", ["asia"])


@pytest.fixture
def scenario_fetcher(europe_source, asia_source) -> FakeFetcher:
    return FakeFetcher(
        {
            europe_source.feed: [
                make_item(title="EU Summit", link="https://a/1", iso_date="2024-01-02T00:00:00Z"),
            ],
            asia_source.feed: [
                make_item(title="Asia Trade Talks", link="https://b/2", iso_date="2024-01-03T00:00:00Z"),
            ],
        }
    )


@pytest.fixture
def fetch_error() -> FetchError:
    return FetchError("https://broken.example.com/rss", "Timed out (ReadTimeout)")
