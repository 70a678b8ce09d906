"""
New-item selection. Keep what is past the cursor, oldest first.

Ids are decimal strings that can exceed 64 bits, so every comparison
goes through int(). Never compare them as strings.
"""

import logging
import re

from models import NormalizedItem

log = logging.getLogger(__name__)

_ID_RE = re.compile(r"[0-9]+")


def parse_id(value: str) -> int:
    """Numeric value of an item id or cursor. Raises ValueError if not a decimal integer."""
    if not isinstance(value, str) or not _ID_RE.fullmatch(value):
        raise ValueError(f"Not a decimal id: {value!r}")
    return int(value)


def is_newer(item_id: str, cursor: str) -> bool:
    return parse_id(item_id) > parse_id(cursor)


def select_new(batch: list[NormalizedItem], cursor: str) -> list[NormalizedItem]:
    """
    Items with id strictly greater than cursor, ascending by id.

    Items with unparseable ids are dropped. A repeated id keeps its
    first occurrence.
    """
    floor = parse_id(cursor)
    keyed: dict[int, NormalizedItem] = {}

    for item in batch:
        try:
            key = parse_id(item.id)
        except ValueError:
            log.warning(f"Skipping item with non-numeric id {item.id!r}")
            continue
        if key > floor and key not in keyed:
            keyed[key] = item

    return [keyed[key] for key in sorted(keyed)]
