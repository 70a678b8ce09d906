"""
Cursor store interface.

One value per source: the highest item id that was fully delivered.
A missing record reads as "0" and is created on first read.
"""

import re
from abc import ABC, abstractmethod

DEFAULT_CURSOR = "0"

_CURSOR_RE = re.compile(r"[0-9]+")


class StoreError(Exception):
    """Raised when the cursor store cannot be read or written."""
    pass


def validate_cursor(value: str) -> str:
    """Cursors are non-negative decimal integers kept as strings."""
    if not isinstance(value, str) or not _CURSOR_RE.fullmatch(value):
        raise StoreError(f"Invalid cursor value: {value!r}")
    return value


class CursorStore(ABC):
    """
    Contract:
    - get() never returns None. Absent records read as "0" and are
      written back as "0" so every source has a row after first read.
    - set() overwrites unconditionally. Last writer wins.
    - Backend failures raise StoreError. Callers do not catch it.
    """

    @abstractmethod
    def get(self, source_id: str) -> str:
        ...

    @abstractmethod
    def set(self, source_id: str, value: str):
        ...

    def close(self):
        pass
