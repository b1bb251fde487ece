"""Source attribution model."""

from pydantic import Field

from ..config import SourceConfig
from .base import APIModel


class SourceSummary(APIModel):
    """Public view of a feed source that was in scope for a query."""

    id: str = Field(..., description="Source identifier")
    name: str = Field(..., description="Source display name")
    homepage: str = Field(..., description="Source homepage URL")

    @classmethod
    def from_source(cls, source: SourceConfig) -> "SourceSummary":
        return cls(id=source.id, name=source.name, homepage=source.homepage)
