"""
Truth Social statuses fetcher. Uses the public Mastodon-style REST endpoint.

The endpoint sits behind bot protection, so requests go out with a desktop
browser User-Agent. No auth.
"""

import logging

import requests

from collectors.base import FeedFetcher, FetchError
from config.settings import Config

log = logging.getLogger(__name__)


class TruthSocialFetcher(FeedFetcher):
    def __init__(self, config: Config, session: requests.Session | None = None):
        self._base_url = config.feed_base_url.rstrip("/")
        self._timeout = config.request_timeout
        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = config.feed_user_agent
        self._session.headers["Accept"] = "application/json"

    def name(self) -> str:
        return "truthsocial"

    def statuses_url(self, source_id: str) -> str:
        return f"{self._base_url}/api/v1/accounts/{source_id}/statuses"

    def fetch(self, source_id: str) -> list[dict]:
        try:
            resp = self._session.get(self.statuses_url(source_id), timeout=self._timeout)
            resp.raise_for_status()
            if not resp.content.strip():
                return []
            data = resp.json()
        except requests.RequestException as e:
            raise FetchError(f"Request for {source_id} failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"Response for {source_id} is not JSON: {e}") from e

        if not isinstance(data, list):
            raise FetchError(
                f"Expected a list of statuses for {source_id}, got {type(data).__name__}"
            )

        log.debug(f"Fetched {len(data)} statuses for {source_id}")
        return [entry for entry in data if isinstance(entry, dict)]
