"""FastAPI dependencies."""

from fastapi import Request

from ..config import Config
from ..pipeline import EventAggregator


def get_aggregator(request: Request) -> EventAggregator:
    """Aggregator built for this application at startup."""
    return request.app.state.aggregator


def get_config(request: Request) -> Config:
    return request.app.state.config
