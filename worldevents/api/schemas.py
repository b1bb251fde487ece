"""API response schemas."""

from typing import List

from pydantic import BaseModel


class SourceResponse(BaseModel):
    id: str
    name: str
    homepage: str
    regions: List[str]


class SourceListResponse(BaseModel):
    sources: List[SourceResponse]
