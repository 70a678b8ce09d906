"""
Item normalization. Raw feed records in, NormalizedItem out.

This is the only place that reads the raw feed shape. Everything past
here works on NormalizedItem.
"""

import html
import re

from models import MediaRef, NormalizedItem, SharedItem

MEDIA_ONLY_PLACEHOLDER = "A post with image(s) or media but no text."
EMPTY_PLACEHOLDER = "Empty post content."

SHARED_MEDIA_ONLY_PLACEHOLDER = "A reblog with image(s) or media but no text."
SHARED_EMPTY_PLACEHOLDER = "Reblog has empty content."

_TAG_RE = re.compile(r"<[^>]*>")


def strip_html(markup: str) -> str:
    """Drop every tag-like substring, decode entities, trim."""
    return html.unescape(_TAG_RE.sub("", markup or "")).strip()


def _body(raw: dict, media_placeholder: str, empty_placeholder: str) -> str:
    text = strip_html(raw.get("content") or "")
    if text:
        return text
    if raw.get("media_attachments"):
        return media_placeholder
    return empty_placeholder


def _media(raw: dict) -> tuple[MediaRef, ...] | None:
    refs = tuple(
        MediaRef(
            type=m.get("type") or "",
            url=m.get("url") or "",
            preview_url=m.get("preview_url") or "",
        )
        for m in (raw.get("media_attachments") or [])
        if isinstance(m, dict)
    )
    return refs or None


def _display_name(raw: dict) -> str | None:
    account = raw.get("account")
    if isinstance(account, dict):
        return account.get("display_name")
    return None


def _str(value) -> str:
    return "" if value is None else str(value)


def _shared(raw: dict) -> SharedItem:
    return SharedItem(
        id=_str(raw.get("id")),
        created_at=_str(raw.get("created_at")),
        url=_str(raw.get("url")),
        content=_body(raw, SHARED_MEDIA_ONLY_PLACEHOLDER, SHARED_EMPTY_PLACEHOLDER),
        display_name=_display_name(raw),
        media=_media(raw),
    )


def normalize(raw: dict | None) -> NormalizedItem:
    """
    Slim a raw feed record down to what delivery needs.

    Body rules (same for the nested shared item, with its own placeholders):
    - stripped text if any is left
    - media placeholder if empty and the item has attachments
    - empty placeholder otherwise

    A missing record gives an item with every string field empty.
    """
    if not raw:
        return NormalizedItem(id="", created_at="", url="", content="")

    reblog = raw.get("reblog")

    return NormalizedItem(
        id=_str(raw.get("id")),
        created_at=_str(raw.get("created_at")),
        url=_str(raw.get("url")),
        content=_body(raw, MEDIA_ONLY_PLACEHOLDER, EMPTY_PLACEHOLDER),
        display_name=_display_name(raw),
        media=_media(raw),
        shared=_shared(reblog) if isinstance(reblog, dict) else None,
    )


def normalize_batch(raw_items: list[dict]) -> list[NormalizedItem]:
    return [normalize(raw) for raw in raw_items]
