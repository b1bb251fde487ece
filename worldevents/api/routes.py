"""Events API router."""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from ..config import Config
from ..models import EventsResponse
from ..pipeline import GLOBAL_REGION, EventAggregator
from .dependencies import get_aggregator, get_config
from .schemas import SourceListResponse, SourceResponse

logger = logging.getLogger(__name__)

router = APIRouter()

NO_STORE = "no-store, max-age=0"


@router.get(
    "/api/events",
    response_model=EventsResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def list_events(
    response: Response,
    query: Optional[str] = Query(None, description="Case-insensitive text filter"),
    region: Optional[str] = Query(None, description="Region tag, or 'global'"),
    limit: Optional[str] = Query(None, description="Maximum events to return"),
    aggregator: EventAggregator = Depends(get_aggregator),
) -> EventsResponse:
    """Fetch all in-scope feeds live and return ranked, deduplicated events."""
    response.headers["Cache-Control"] = NO_STORE
    try:
        result = await aggregator.aggregate(query=query, region=region, limit=limit)
    except Exception:
        logger.exception("Event aggregation failed")
        raise HTTPException(
            status_code=500,
            detail="Event aggregation failed",
            headers={"Cache-Control": NO_STORE},
        )
    return result.to_response()


@router.get("/api/sources", response_model=SourceListResponse)
async def list_sources(config: Config = Depends(get_config)) -> SourceListResponse:
    """Feed source registry, enabled sources only."""
    return SourceListResponse(
        sources=[
            SourceResponse(id=s.id, name=s.name, homepage=s.homepage, regions=s.regions)
            for s in config.sources
            if s.enabled
        ]
    )


@router.get("/api/regions")
async def list_regions(config: Config = Depends(get_config)) -> Dict[str, List[str]]:
    """Region tags declared by the registry, with 'global' first."""
    regions: List[str] = [GLOBAL_REGION]
    for source in config.sources:
        if not source.enabled:
            continue
        for region in source.regions:
            if region not in regions:
                regions.append(region)
    return {"regions": regions}


@router.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}
