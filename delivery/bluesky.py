"""
Bluesky primary sink. Talks to the AT Protocol XRPC HTTP API directly.

Two calls:
- com.atproto.server.createSession, once per client (lazily, on first publish)
- com.atproto.repo.createRecord, once per post

The client is meant to be built once per process and reused across
sources and invocations. It is not safe to share between threads.
"""

import logging
from datetime import datetime, timezone

import requests

from delivery.base import DeliveryError, PrimarySink
from models import PreparedPost

log = logging.getLogger(__name__)

LINK_PREFIX = "\nLink: "
ELLIPSIS = "..."
POST_COLLECTION = "app.bsky.feed.post"


def prepare_post(text: str, url: str, max_length: int = 300) -> PreparedPost:
    """
    Build the post body: text, then the link on its own line.

    Only the text is ever shortened. The link survives whole, and its
    span is taken from where it was appended, not by searching the body.
    """
    suffix = f"{LINK_PREFIX}{url}"
    available = max_length - len(suffix)

    if len(text) > available:
        if available >= len(ELLIPSIS):
            text = text[:available - len(ELLIPSIS)].rstrip() + ELLIPSIS
        else:
            # No room for any text. Keep the link alone.
            text = ""
            suffix = suffix.lstrip("\n")

    body = f"{text}{suffix}"
    return PreparedPost(
        text=body,
        link=url,
        link_start=len(body) - len(url),
        link_end=len(body),
    )


def link_facet(post: PreparedPost) -> dict:
    byte_start, byte_end = post.byte_span()
    return {
        "index": {"byteStart": byte_start, "byteEnd": byte_end},
        "features": [{"$type": "app.bsky.richtext.facet#link", "uri": post.link}],
    }


class BlueskyClient(PrimarySink):
    def __init__(
        self,
        service: str,
        identifier: str,
        password: str,
        timeout: int = 20,
        session: requests.Session | None = None,
    ):
        if not identifier or not password:
            raise DeliveryError("BLUESKY_USERNAME / BLUESKY_PASSWORD not set")
        self._service = service.rstrip("/")
        self._identifier = identifier
        self._password = password
        self._timeout = timeout
        self._session = session or requests.Session()
        self._access_jwt: str | None = None
        self._did: str | None = None

    def name(self) -> str:
        return f"bluesky/{self._identifier}"

    def _xrpc(self, method: str) -> str:
        return f"{self._service}/xrpc/{method}"

    def login(self):
        try:
            resp = self._session.post(
                self._xrpc("com.atproto.server.createSession"),
                json={"identifier": self._identifier, "password": self._password},
                timeout=self._timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise DeliveryError(f"Bluesky login failed: {e}") from e

        if not isinstance(data, dict):
            raise DeliveryError(f"Bluesky login returned unexpected body: {data!r:.100}")
        self._access_jwt = data.get("accessJwt")
        self._did = data.get("did")
        if not self._access_jwt or not self._did:
            raise DeliveryError("Bluesky login returned no session")
        log.info(f"Bluesky session opened for {self._identifier}")

    def _create_record(self, record: dict) -> requests.Response:
        return self._session.post(
            self._xrpc("com.atproto.repo.createRecord"),
            json={"repo": self._did, "collection": POST_COLLECTION, "record": record},
            headers={"Authorization": f"Bearer {self._access_jwt}"},
            timeout=self._timeout,
        )

    def publish(self, post: PreparedPost) -> str:
        if self._access_jwt is None:
            self.login()

        record = {
            "$type": POST_COLLECTION,
            "text": post.text,
            "createdAt": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "facets": [link_facet(post)],
        }

        try:
            resp = self._create_record(record)
            if resp.status_code in (400, 401) and _is_expired(resp):
                log.info("Bluesky session expired, logging in again")
                self.login()
                resp = self._create_record(record)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise DeliveryError(f"Bluesky post failed: {e}") from e

        if not isinstance(data, dict):
            raise DeliveryError(f"Bluesky post returned unexpected body: {data!r:.100}")
        return data.get("uri", "")


def _is_expired(resp: requests.Response) -> bool:
    try:
        data = resp.json()
    except ValueError:
        return False
    return isinstance(data, dict) and data.get("error") in ("ExpiredToken", "InvalidToken")
