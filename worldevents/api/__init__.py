"""HTTP query interface."""

from .app import build_aggregator, create_app

__all__ = ["build_aggregator", "create_app"]
