"""Map raw feed items onto canonical events."""

import base64
import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, List, Optional, Sequence

import pendulum

from ..config import SourceConfig
from ..ingestion import RawFeedItem
from ..models import WorldEvent
from ..models.event import HTTP_URL_RE

WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(value: Optional[str]) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    if not value:
        return ""
    return WHITESPACE_RE.sub(" ", value).strip()


def _is_http_url(value: Any) -> bool:
    return isinstance(value, str) and bool(HTTP_URL_RE.match(value))


class ImageStrategy(ABC):
    """One way of finding an illustrative image on a feed item."""

    @abstractmethod
    def extract(self, item: RawFeedItem) -> Optional[str]:
        """Return an http(s) image URL, or None if this item has none."""
        pass


class EnclosureImageStrategy(ImageStrategy):
    """Use the item's enclosure URL."""

    def extract(self, item: RawFeedItem) -> Optional[str]:
        if item.enclosure and _is_http_url(item.enclosure.url):
            return item.enclosure.url
        return None


class MediaContentImageStrategy(ImageStrategy):
    """Use the first media:content entry that carries a URL.

    Feeds do not promise any ordering of media:content entries, so "first"
    is document order as parsed.
    """

    def extract(self, item: RawFeedItem) -> Optional[str]:
        for media in item.media_content:
            if "url" in media:
                url = media.get("url")
                return url if _is_http_url(url) else None
        return None


DEFAULT_IMAGE_STRATEGIES: Sequence[ImageStrategy] = (
    EnclosureImageStrategy(),
    MediaContentImageStrategy(),
)


def resolve_image(
    item: RawFeedItem, strategies: Sequence[ImageStrategy] = DEFAULT_IMAGE_STRATEGIES
) -> Optional[str]:
    """Try each strategy in order; first http(s) URL wins."""
    for strategy in strategies:
        image = strategy.extract(item)
        if _is_http_url(image):
            return image
    return None


def _parse_iso(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = pendulum.parse(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return parsed if isinstance(parsed, datetime) else None


def _parse_human(value: Optional[str]) -> Optional[datetime]:
    """Parse an RFC 822 style date, falling back to pendulum's lenient parser."""
    if not value:
        return None
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError, OverflowError):
        pass
    try:
        parsed = pendulum.parse(value, strict=False)
    except (TypeError, ValueError, OverflowError):
        return None
    return parsed if isinstance(parsed, datetime) else None


def resolve_published_at(item: RawFeedItem) -> Optional[datetime]:
    """Prefer the ISO date; otherwise parse the human-formatted one."""
    published = _parse_iso(item.iso_date) or _parse_human(item.pub_date)
    if published is None:
        return None
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    try:
        return published.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def make_event_id(source_id: str, url: str) -> str:
    """Deterministic id: source id plus the URL in unpadded base64url."""
    encoded = base64.urlsafe_b64encode(url.encode("utf-8")).decode("ascii").rstrip("=")
    return f"{source_id}:{encoded}"


def normalize_event(
    source: SourceConfig,
    item: RawFeedItem,
    image_strategies: Sequence[ImageStrategy] = DEFAULT_IMAGE_STRATEGIES,
) -> Optional[WorldEvent]:
    """Build a WorldEvent from one raw item, or None if it lacks title, url or date."""
    url = (item.link or "").strip()
    title = (item.title or "").strip()
    published_at = resolve_published_at(item)

    if not title or not url or published_at is None:
        return None

    summary = normalize_whitespace(item.content_snippet) or normalize_whitespace(item.content)

    return WorldEvent(
        id=make_event_id(source.id, url),
        title=title,
        summary=summary,
        url=url,
        source_id=source.id,
        source_name=source.name,
        source_homepage=source.homepage,
        published_at=published_at,
        regions=list(source.regions),
        image=resolve_image(item, image_strategies),
    )


def normalize_items(
    source: SourceConfig,
    items: List[RawFeedItem],
    image_strategies: Sequence[ImageStrategy] = DEFAULT_IMAGE_STRATEGIES,
) -> List[WorldEvent]:
    """Normalise a feed's items in feed order, dropping rejected ones."""
    events = []
    for item in items:
        event = normalize_event(source, item, image_strategies)
        if event is not None:
            events.append(event)
    return events
