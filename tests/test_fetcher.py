"""
Tests for the statuses fetcher. No network: a fake session stands in
for requests.Session.
"""

import json
from pathlib import Path

import pytest
import requests
import sys

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from collectors import FetchError, TruthSocialFetcher
from config.settings import Config


class FakeResponse:
    def __init__(self, status_code=200, payload=None, body: bytes | None = None):
        self.status_code = status_code
        if body is None:
            body = json.dumps(payload).encode() if payload is not None else b""
        self.content = body

    def json(self):
        return json.loads(self.content)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.headers = {}
        self.calls = []
        self._response = response
        self._exc = exc

    def get(self, url, timeout=None, **kwargs):
        self.calls.append((url, timeout))
        if self._exc:
            raise self._exc
        return self._response


def _fetcher(session):
    config = Config(feed_base_url="https://feed.example/", request_timeout=7)
    return TruthSocialFetcher(config, session=session)


class TestTruthSocialFetcher:
    def test_returns_items_in_feed_order(self):
        session = FakeSession(FakeResponse(payload=[{"id": "3"}, {"id": "2"}, {"id": "1"}]))
        items = _fetcher(session).fetch("107780257626128497")

        assert [i["id"] for i in items] == ["3", "2", "1"]
        assert session.calls == [
            ("https://feed.example/api/v1/accounts/107780257626128497/statuses", 7)
        ]

    def test_sets_browser_headers(self):
        session = FakeSession(FakeResponse(payload=[]))
        _fetcher(session)
        assert "Mozilla" in session.headers["User-Agent"]
        assert session.headers["Accept"] == "application/json"

    def test_empty_list(self):
        assert _fetcher(FakeSession(FakeResponse(payload=[]))).fetch("1") == []

    def test_empty_body(self):
        assert _fetcher(FakeSession(FakeResponse(body=b"  "))).fetch("1") == []

    def test_drops_non_dict_entries(self):
        session = FakeSession(FakeResponse(payload=[{"id": "1"}, "junk", None]))
        assert _fetcher(session).fetch("1") == [{"id": "1"}]

    def test_http_error(self):
        with pytest.raises(FetchError):
            _fetcher(FakeSession(FakeResponse(status_code=403, body=b"blocked"))).fetch("1")

    def test_transport_error(self):
        session = FakeSession(exc=requests.ConnectionError("reset"))
        with pytest.raises(FetchError):
            _fetcher(session).fetch("1")

    def test_not_json(self):
        with pytest.raises(FetchError):
            _fetcher(FakeSession(FakeResponse(body=b"<html>challenge</html>"))).fetch("1")

    def test_not_a_list(self):
        with pytest.raises(FetchError):
            _fetcher(FakeSession(FakeResponse(payload={"error": "Record not found"}))).fetch("1")
