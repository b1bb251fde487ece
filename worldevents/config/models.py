"""Configuration models."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; WorldEventsAgent/1.0; +https://github.com/worldevents)"


class FetchConfig(BaseModel):
    """Outbound feed fetch configuration."""

    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header sent to feeds")
    timeout: float = Field(15.0, description="Per-feed timeout in seconds", gt=0.0, le=120.0)
    max_concurrent: Optional[int] = Field(
        None, description="Max simultaneous feed fetches (unbounded if unset)", ge=1
    )


class QueryDefaults(BaseModel):
    """Defaults applied to event queries."""

    default_limit: int = Field(60, description="Limit used when none is given", ge=1)
    min_limit: int = Field(10, description="Smallest limit a caller can request", ge=1)


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field("127.0.0.1", description="Bind host")
    port: int = Field(8000, description="Bind port", ge=1, le=65535)


class ConfigModel(BaseModel):
    """Main configuration model."""

    sources_path: Optional[str] = Field(None, description="Path to sources.yaml")
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    query: QueryDefaults = Field(default_factory=QueryDefaults)
    server: ServerConfig = Field(default_factory=ServerConfig)


class SourceConfig(BaseModel):
    """Feed source entry from sources.yaml."""

    id: str = Field(..., description="Stable short identifier", min_length=1)
    name: str = Field(..., description="Display name")
    homepage: str = Field(..., description="Source homepage URL")
    feed: str = Field(..., description="RSS/Atom feed URL")
    regions: List[str] = Field(..., description="Region tags this source covers")
    enabled: bool = Field(True, description="Whether source is enabled")

    @field_validator("regions")
    @classmethod
    def normalize_regions(cls, v: List[str]) -> List[str]:
        """Lower-case region tags, drop blanks and repeats."""
        regions: List[str] = []
        for region in v:
            tag = region.strip().lower()
            if tag and tag not in regions:
                regions.append(tag)
        if not regions:
            raise ValueError("Source must declare at least one region")
        return regions
