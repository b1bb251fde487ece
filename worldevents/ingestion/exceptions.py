"""Ingestion errors."""


class FetchError(Exception):
    """Raised when a feed cannot be fetched or parsed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{reason}: {url}")
        self.url = url
        self.reason = reason
