"""
Core data types. No behavior beyond serialization, just shapes.

Raw feed records stay plain dicts and never get past filters/normalizer.py.
"""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class MediaRef:
    """Slim media attachment descriptor."""
    type: str
    url: str
    preview_url: str

    def to_dict(self) -> dict:
        return {"type": self.type, "url": self.url, "preview_url": self.preview_url}


@dataclass(frozen=True)
class SharedItem:
    """A nested (reblogged/quoted) item. Same shape as NormalizedItem, no further nesting."""
    id: str
    created_at: str
    url: str
    content: str
    display_name: str | None = None
    media: tuple[MediaRef, ...] | None = None   # None when the item had no attachments

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "created_at": self.created_at,
            "url": self.url,
            "content": self.content,
        }
        if self.display_name is not None:
            data["display_name"] = self.display_name
        if self.media:
            data["media"] = [m.to_dict() for m in self.media]
        return data


@dataclass(frozen=True)
class NormalizedItem:
    """The unit the delivery pipeline works on."""
    id: str
    created_at: str
    url: str
    content: str            # plain text or one of the placeholder strings
    display_name: str | None = None
    media: tuple[MediaRef, ...] | None = None
    shared: SharedItem | None = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "created_at": self.created_at,
            "url": self.url,
            "content": self.content,
        }
        if self.display_name is not None:
            data["display_name"] = self.display_name
        if self.media:
            data["media"] = [m.to_dict() for m in self.media]
        if self.shared is not None:
            data["shared"] = self.shared.to_dict()
        return data


@dataclass(frozen=True)
class PreparedPost:
    """A primary-sink message with the location of its embedded link."""
    text: str
    link: str
    link_start: int         # character offsets into text
    link_end: int

    def byte_span(self) -> tuple[int, int]:
        """UTF-8 byte offsets of the link, as rich-text facets expect."""
        start = len(self.text[:self.link_start].encode("utf-8"))
        return start, start + len(self.link.encode("utf-8"))


@dataclass(frozen=True)
class Notification:
    """A notification-sink message."""
    title: str
    summary: str
    link: str
    created_at: str
    item_id: str


class SourceStatus(Enum):
    NO_NEW_ITEMS = "no_new_items"
    COMPLETED = "completed"
    PARTIAL = "partial"
    FAILED = "failed"
    FETCH_FAILED = "fetch_failed"


@dataclass
class SourceResult:
    """Outcome of one source's pass through the pipeline."""
    source_id: str
    status: SourceStatus
    cursor_before: str = "0"
    cursor_after: str = "0"
    delivered: list[str] = field(default_factory=list)   # ids, in delivery order
    pending: list[str] = field(default_factory=list)     # ids left for the next run
    committed: bool = False                               # cursor_after was written to the store
    error: str | None = None

    @property
    def ok(self) -> bool:
        # A failed fetch delivers nothing and leaves the cursor alone; the next run retries it.
        return self.status in (
            SourceStatus.NO_NEW_ITEMS, SourceStatus.COMPLETED, SourceStatus.FETCH_FAILED,
        )

    def to_dict(self) -> dict:
        return {
            "source_id": self.source_id,
            "status": self.status.value,
            "cursor_before": self.cursor_before,
            "cursor_after": self.cursor_after,
            "delivered": self.delivered,
            "pending": self.pending,
            "committed": self.committed,
            "error": self.error,
        }

    def __repr__(self) -> str:
        return (
            f"SourceResult({self.source_id}, {self.status.value}, "
            f"{self.cursor_before}->{self.cursor_after}, delivered={len(self.delivered)})"
        )
