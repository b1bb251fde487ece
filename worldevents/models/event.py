"""Canonical event and query response models."""

import re
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import Field, field_serializer, field_validator

from .base import APIModel
from .source import SourceSummary

HTTP_URL_RE = re.compile(r"^https?://")


class WorldEvent(APIModel):
    """A news item normalised from one feed source."""

    id: str = Field(..., description="Deterministic id derived from source id and url")
    title: str = Field(..., description="Trimmed headline", min_length=1)
    summary: str = Field("", description="Whitespace-normalised summary")
    url: str = Field(..., description="Canonical article link", min_length=1)
    source_id: str = Field(..., description="Owning source id")
    source_name: str = Field(..., description="Owning source name")
    source_homepage: str = Field(..., description="Owning source homepage")
    published_at: datetime = Field(..., description="Publication instant (UTC)")
    regions: List[str] = Field(default_factory=list, description="Regions of the owning source")
    image: Optional[str] = Field(None, description="Illustrative image URL")

    @field_validator("published_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC and convert aware ones to UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_validator("image")
    @classmethod
    def validate_image(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not HTTP_URL_RE.match(v):
            raise ValueError(f"Image must be an http(s) URL: {v}")
        return v

    @field_serializer("published_at")
    def serialize_published_at(self, v: datetime) -> str:
        return v.isoformat().replace("+00:00", "Z")


class EventsResponse(APIModel):
    """Payload returned by the events query."""

    fetched_at: datetime = Field(..., description="When this aggregation ran")
    events: List[WorldEvent] = Field(default_factory=list, description="Ranked events")
    sources: List[SourceSummary] = Field(default_factory=list, description="Sources in scope")

    @field_serializer("fetched_at")
    def serialize_fetched_at(self, v: datetime) -> str:
        return v.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
