"""Event aggregation across feed sources."""

import asyncio
import logging
import re
from datetime import datetime
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple, Union

import pendulum
from pydantic import BaseModel, Field

from ..config import QueryDefaults, SourceConfig
from ..ingestion import FeedResult, FetchError, RawFeedItem
from ..models import EventsResponse, SourceSummary, WorldEvent
from .normalizer import DEFAULT_IMAGE_STRATEGIES, ImageStrategy, normalize_items

logger = logging.getLogger(__name__)

GLOBAL_REGION = "global"

_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


class FeedClient(Protocol):
    """Anything that can turn a feed URL into raw items."""

    async def fetch_feed(self, url: str) -> List[RawFeedItem]:
        ...


class AggregationResult(BaseModel):
    """Outcome of one aggregation run."""

    fetched_at: datetime = Field(..., description="When the fetch fan-out settled")
    events: List[WorldEvent] = Field(default_factory=list, description="Ranked, limited events")
    sources: List[SourceSummary] = Field(default_factory=list, description="Sources in scope")
    feed_results: List[FeedResult] = Field(default_factory=list, description="Per-source outcome")

    def to_response(self) -> EventsResponse:
        """Public payload; per-source outcomes are not exposed."""
        return EventsResponse(fetched_at=self.fetched_at, events=self.events, sources=self.sources)


def resolve_limit(raw: Union[int, str, None], default: int = 60, floor: int = 10) -> int:
    """Resolve a caller-supplied limit.

    Missing or non-numeric values give the default. Numeric text is read up to
    the first non-digit ("25abc" is 25). Anything below the floor is raised to it.
    """
    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        value = raw
    else:
        match = _LEADING_INT_RE.match(str(raw))
        if not match:
            return default
        value = int(match.group(1))
    return max(value, floor)


def resolve_region(raw: Optional[str]) -> str:
    """Lower-case region tag; blank or missing means global."""
    region = (raw or "").strip().lower()
    return region or GLOBAL_REGION


def select_sources(sources: Iterable[SourceConfig], region: str) -> List[SourceConfig]:
    """Enabled sources covering the region, in registry order."""
    enabled = [s for s in sources if s.enabled]
    if region == GLOBAL_REGION:
        return enabled
    return [s for s in enabled if region in s.regions]


def deduplicate(events: Iterable[WorldEvent]) -> List[WorldEvent]:
    """Keep the first event seen for each url, preserving order."""
    seen = set()
    out: List[WorldEvent] = []
    for event in events:
        if event.url in seen:
            continue
        seen.add(event.url)
        out.append(event)
    return out


def filter_by_query(events: Iterable[WorldEvent], query: Optional[str]) -> List[WorldEvent]:
    """Case-insensitive substring match against title and summary."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(events)
    return [e for e in events if needle in f"{e.title} {e.summary}".lower()]


def sort_by_recency(events: Iterable[WorldEvent]) -> List[WorldEvent]:
    """Newest first; ties keep their incoming order."""
    return sorted(events, key=lambda e: e.published_at, reverse=True)


class EventAggregator:
    """Fetch selected sources concurrently and merge them into one ranked list."""

    def __init__(
        self,
        fetcher: FeedClient,
        sources: Sequence[SourceConfig],
        query_defaults: Optional[QueryDefaults] = None,
        max_concurrent: Optional[int] = None,
        image_strategies: Sequence[ImageStrategy] = DEFAULT_IMAGE_STRATEGIES,
    ) -> None:
        """
        Initialize event aggregator.

        Args:
            fetcher: Feed client used for every source
            sources: Feed source registry, in priority order
            query_defaults: Default and minimum result limits
            max_concurrent: Cap on simultaneous fetches, None for no cap
            image_strategies: Image extraction strategies in priority order
        """
        self.fetcher = fetcher
        self.sources = list(sources)
        self.query_defaults = query_defaults or QueryDefaults()
        self.max_concurrent = max_concurrent
        self.image_strategies = image_strategies

    async def fetch_source(self, source: SourceConfig) -> Tuple[List[WorldEvent], FeedResult]:
        """Fetch and normalise one source. Never raises; failures yield no events."""
        result = FeedResult(
            source_id=source.id,
            source_name=source.name,
            feed_url=source.feed,
            success=False,
        )
        try:
            items = await self.fetcher.fetch_feed(source.feed)
            events = normalize_items(source, items, self.image_strategies)
        except FetchError as e:
            logger.warning("Failed to fetch %s: %s", source.id, e)
            return [], result.model_copy(update={"error": str(e)})
        except Exception as e:
            logger.exception("Unexpected error fetching %s", source.id)
            return [], result.model_copy(update={"error": f"Unexpected error: {e}"})

        return events, result.model_copy(
            update={"success": True, "item_count": len(items), "event_count": len(events)}
        )

    async def fetch_all(
        self, sources: Sequence[SourceConfig]
    ) -> List[Tuple[List[WorldEvent], FeedResult]]:
        """Fetch all sources concurrently; results follow the order of `sources`."""
        if not sources:
            return []

        if self.max_concurrent is None:
            return list(await asyncio.gather(*(self.fetch_source(s) for s in sources)))

        semaphore = asyncio.Semaphore(self.max_concurrent)

        async def fetch_with_semaphore(source: SourceConfig) -> Tuple[List[WorldEvent], FeedResult]:
            async with semaphore:
                return await self.fetch_source(source)

        return list(await asyncio.gather(*(fetch_with_semaphore(s) for s in sources)))

    async def aggregate(
        self,
        query: Optional[str] = None,
        region: Optional[str] = None,
        limit: Union[int, str, None] = None,
    ) -> AggregationResult:
        """Run one aggregation: select, fetch, merge, dedupe, filter, sort, limit."""
        resolved_region = resolve_region(region)
        resolved_limit = resolve_limit(
            limit,
            default=self.query_defaults.default_limit,
            floor=self.query_defaults.min_limit,
        )
        selected = select_sources(self.sources, resolved_region)

        results = await self.fetch_all(selected)
        fetched_at = pendulum.now("UTC")

        combined = [event for events, _ in results for event in events]
        events = deduplicate(combined)
        events = filter_by_query(events, query)
        events = sort_by_recency(events)[:resolved_limit]

        feed_results = [feed_result for _, feed_result in results]
        failed = sum(1 for r in feed_results if not r.success)
        logger.info(
            "Aggregated %d events from %d sources (%d failed) region=%s query=%r",
            len(events),
            len(selected),
            failed,
            resolved_region,
            query,
        )

        return AggregationResult(
            fetched_at=fetched_at,
            events=events,
            sources=[SourceSummary.from_source(s) for s in selected],
            feed_results=feed_results,
        )
