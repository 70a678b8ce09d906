"""
Tests for item normalization:
- markup stripping
- placeholder substitution for empty and media-only posts
- shared (reblogged) items
- the degenerate missing-record case
"""

import dataclasses
from pathlib import Path

import pytest
import sys

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from filters.normalizer import (
    EMPTY_PLACEHOLDER,
    MEDIA_ONLY_PLACEHOLDER,
    SHARED_EMPTY_PLACEHOLDER,
    SHARED_MEDIA_ONLY_PLACEHOLDER,
    normalize,
    normalize_batch,
    strip_html,
)
from models import MediaRef


def _raw(**overrides):
    """Factory for a raw status record, trimmed to realistic fields."""
    base = {
        "id": "113000000000000001",
        "created_at": "2025-01-20T17:04:00.000Z",
        "url": "https://truthsocial.com/@someone/113000000000000001",
        "content": "<p>Hello world</p>",
        "account": {"id": "1", "username": "someone", "display_name": "Some One"},
        "media_attachments": [],
        "reblog": None,
        "replies_count": 12,
        "favourites_count": 400,
    }
    base.update(overrides)
    return base


def _image(n=1):
    return {
        "id": f"m{n}",
        "type": "image",
        "url": f"https://static.example/{n}.jpg",
        "preview_url": f"https://static.example/{n}_small.jpg",
        "blurhash": "xyz",
        "meta": {"original": {"width": 10, "height": 10}},
    }


# ──────────────────────────────────────────────
# strip_html
# ──────────────────────────────────────────────

class TestStripHtml:
    def test_removes_tags_and_trims(self):
        assert strip_html("  <p>Hello <b>world</b></p>\n") == "Hello world"

    def test_decodes_entities_after_stripping(self):
        assert strip_html("<p>A &amp; B &lt;3</p>") == "A & B <3"

    def test_only_markup_is_empty(self):
        assert strip_html("<p></p><br/>") == ""

    def test_none_is_empty(self):
        assert strip_html(None) == ""


# ──────────────────────────────────────────────
# normalize
# ──────────────────────────────────────────────

class TestNormalize:
    def test_basic_fields(self):
        item = normalize(_raw())
        assert item.id == "113000000000000001"
        assert item.created_at == "2025-01-20T17:04:00.000Z"
        assert item.url == "https://truthsocial.com/@someone/113000000000000001"
        assert item.content == "Hello world"
        assert item.display_name == "Some One"
        assert item.media is None
        assert item.shared is None

    def test_media_only_placeholder(self):
        item = normalize(_raw(content="<p></p>", media_attachments=[_image()]))
        assert item.content == MEDIA_ONLY_PLACEHOLDER
        assert item.media == (
            MediaRef(
                type="image",
                url="https://static.example/1.jpg",
                preview_url="https://static.example/1_small.jpg",
            ),
        )

    def test_empty_placeholder(self):
        item = normalize(_raw(content="", media_attachments=[]))
        assert item.content == EMPTY_PLACEHOLDER

    def test_missing_content_key(self):
        raw = _raw()
        del raw["content"]
        assert normalize(raw).content == EMPTY_PLACEHOLDER

    def test_text_with_media_keeps_text(self):
        item = normalize(_raw(content="<p>Look</p>", media_attachments=[_image(1), _image(2)]))
        assert item.content == "Look"
        assert len(item.media) == 2

    def test_media_omitted_from_dict_when_empty(self):
        data = normalize(_raw(media_attachments=[])).to_dict()
        assert "media" not in data
        assert "shared" not in data
        assert set(data) == {"id", "created_at", "url", "content", "display_name"}

    def test_drops_irrelevant_fields(self):
        data = normalize(_raw()).to_dict()
        assert "replies_count" not in data
        assert "favourites_count" not in data

    def test_numeric_id_becomes_string(self):
        assert normalize(_raw(id=42)).id == "42"

    def test_no_account(self):
        raw = _raw()
        del raw["account"]
        assert normalize(raw).display_name is None

    def test_none_record(self):
        item = normalize(None)
        assert item.id == ""
        assert item.created_at == ""
        assert item.url == ""
        assert item.content == ""
        assert item.media is None
        assert item.shared is None

    def test_items_are_immutable(self):
        item = normalize(_raw())
        with pytest.raises(dataclasses.FrozenInstanceError):
            item.content = "changed"


class TestSharedItem:
    def test_reblog_is_stripped(self):
        shared = {
            "id": "112",
            "created_at": "2025-01-19T00:00:00.000Z",
            "url": "https://truthsocial.com/@other/112",
            "content": "<p>Original <a href=\"https://x\">post</a></p>",
            "account": {"display_name": "Other"},
        }
        item = normalize(_raw(content="", reblog=shared))

        assert item.content == EMPTY_PLACEHOLDER
        assert item.shared.id == "112"
        assert item.shared.content == "Original post"
        assert item.shared.display_name == "Other"
        assert item.shared.media is None

    def test_reblog_media_only(self):
        item = normalize(_raw(reblog={"id": "5", "content": "", "media_attachments": [_image()]}))
        assert item.shared.content == SHARED_MEDIA_ONLY_PLACEHOLDER
        assert item.shared.media[0].type == "image"

    def test_reblog_empty(self):
        item = normalize(_raw(reblog={"id": "5", "content": "<p> </p>"}))
        assert item.shared.content == SHARED_EMPTY_PLACEHOLDER

    def test_only_one_level_of_nesting(self):
        inner = {"id": "1", "content": "<p>deepest</p>"}
        item = normalize(_raw(reblog={"id": "5", "content": "<p>mid</p>", "reblog": inner}))
        assert item.shared.content == "mid"
        assert "shared" not in item.shared.to_dict()

    def test_shared_in_dict(self):
        data = normalize(_raw(reblog={"id": "5", "content": "<p>mid</p>"})).to_dict()
        assert data["shared"]["content"] == "mid"
        assert "media" not in data["shared"]


def test_normalize_batch_keeps_order():
    batch = normalize_batch([_raw(id="3"), _raw(id="1"), _raw(id="2")])
    assert [item.id for item in batch] == ["3", "1", "2"]
