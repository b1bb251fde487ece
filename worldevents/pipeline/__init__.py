"""Event aggregation pipeline."""

from .aggregator import (
    GLOBAL_REGION,
    AggregationResult,
    EventAggregator,
    deduplicate,
    filter_by_query,
    resolve_limit,
    resolve_region,
    select_sources,
    sort_by_recency,
)
from .normalizer import (
    EnclosureImageStrategy,
    ImageStrategy,
    MediaContentImageStrategy,
    make_event_id,
    normalize_event,
    normalize_items,
    normalize_whitespace,
    resolve_image,
)

__all__ = [
    "GLOBAL_REGION",
    "AggregationResult",
    "EventAggregator",
    "EnclosureImageStrategy",
    "ImageStrategy",
    "MediaContentImageStrategy",
    "deduplicate",
    "filter_by_query",
    "make_event_id",
    "normalize_event",
    "normalize_items",
    "normalize_whitespace",
    "resolve_image",
    "resolve_limit",
    "resolve_region",
    "select_sources",
    "sort_by_recency",
]
