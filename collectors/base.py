"""
Base fetcher interface. All feed fetchers must implement this.
"""

from abc import ABC, abstractmethod


class FetchError(Exception):
    """Raised when a feed answers with something that is not a list of items."""
    pass


class FeedFetcher(ABC):
    """
    A fetcher pulls the current page of raw items for one source.

    Contract:
    - fetch() returns raw dicts in the feed's native order (newest first, usually).
    - fetch() knows nothing about cursors. Selection happens later.
    - An empty feed is an empty list, not an error.
    - Transport and payload problems raise. The pipeline decides what that means.
    """

    @abstractmethod
    def fetch(self, source_id: str) -> list[dict]:
        ...

    @abstractmethod
    def name(self) -> str:
        """Fetcher name, used in logs."""
        ...
