"""Data models for ingestion."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class Enclosure(BaseModel):
    """Enclosure attached to a feed item."""

    url: Optional[str] = Field(None, description="Enclosure URL")
    type: Optional[str] = Field(None, description="MIME type")
    length: Optional[str] = Field(None, description="Declared size in bytes")


class RawFeedItem(BaseModel):
    """Feed item as read from the syndication document, before normalisation."""

    link: Optional[str] = Field(None, description="Item link")
    title: Optional[str] = Field(None, description="Item title")
    iso_date: Optional[str] = Field(None, description="ISO-8601 publication date")
    pub_date: Optional[str] = Field(None, description="Publication date as written in the feed")
    content_snippet: Optional[str] = Field(None, description="Plain-text snippet")
    content: Optional[str] = Field(None, description="Raw item content")
    enclosure: Optional[Enclosure] = Field(None, description="First enclosure")
    media_content: List[Dict[str, Any]] = Field(
        default_factory=list, description="media:content attribute dicts"
    )


class FeedResult(BaseModel):
    """Result of fetching one source during an aggregation."""

    source_id: str = Field(..., description="Source id")
    source_name: str = Field(..., description="Source name")
    feed_url: str = Field(..., description="RSS feed URL")
    success: bool = Field(..., description="Whether fetch was successful")
    error: Optional[str] = Field(None, description="Error message if failed")
    item_count: int = Field(0, description="Number of raw items fetched")
    event_count: int = Field(0, description="Number of items that normalised into events")
