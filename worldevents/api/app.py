"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from ..config import Config
from ..ingestion import RSSFetcher, build_client
from ..pipeline import EventAggregator
from .routes import router

logger = logging.getLogger(__name__)


def build_aggregator(config: Config, fetcher: RSSFetcher) -> EventAggregator:
    """Wire an aggregator from configuration."""
    return EventAggregator(
        fetcher=fetcher,
        sources=config.sources,
        query_defaults=config.config.query,
        max_concurrent=config.config.fetch.max_concurrent,
    )


def create_app(
    config: Optional[Config] = None,
    aggregator: Optional[EventAggregator] = None,
) -> FastAPI:
    """
    Create the API application.

    Args:
        config: Configuration manager (default location if omitted)
        aggregator: Pre-built aggregator; when given, no HTTP client is created
    """
    config = config or Config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.config = config
        if aggregator is not None:
            app.state.aggregator = aggregator
            yield
            return

        async with build_client(config.config.fetch) as client:
            fetcher = RSSFetcher(client, config.config.fetch.timeout)
            app.state.aggregator = build_aggregator(config, fetcher)
            logger.info("Serving %d feed sources", len(config.sources))
            yield

    app = FastAPI(
        title="World Events",
        description="Live world news aggregated from syndicated feeds",
        lifespan=lifespan,
    )
    app.include_router(router)
    return app
