"""Data models for the world events aggregator."""

from .event import EventsResponse, WorldEvent
from .source import SourceSummary

__all__ = ["EventsResponse", "SourceSummary", "WorldEvent"]
