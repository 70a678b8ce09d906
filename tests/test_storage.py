"""
Tests for the cursor stores:
- SQLite: default-and-initialize on read, overwrite on write, persistence
- DynamoDB: same contract against an in-memory table
- errors surface as StoreError
"""

import tempfile
from pathlib import Path

import pytest
import sys

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from botocore.exceptions import ClientError

from config.settings import Config
from storage import StoreError, create_store
from storage.db import SQLiteCursorStore
from storage.dynamo import DynamoCursorStore


# ──────────────────────────────────────────────
# Fixtures
# ──────────────────────────────────────────────

@pytest.fixture
def tmp_db_path():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "nested" / "relay.db"


@pytest.fixture
def sqlite_store(tmp_db_path):
    store = SQLiteCursorStore(tmp_db_path)
    yield store
    store.close()


class FakeTable:
    """Just enough of a boto3 DynamoDB Table."""

    def __init__(self, fail_on: str | None = None):
        self.items: dict[str, dict] = {}
        self.puts: list[dict] = []
        self._fail_on = fail_on

    def _maybe_fail(self, op: str):
        if self._fail_on == op:
            raise ClientError(
                {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "slow down"}},
                op,
            )

    def get_item(self, Key):
        self._maybe_fail("GetItem")
        item = self.items.get(Key["account"])
        return {"Item": dict(item)} if item else {}

    def put_item(self, Item):
        self._maybe_fail("PutItem")
        self.items[Item["account"]] = dict(Item)
        self.puts.append(dict(Item))


# ──────────────────────────────────────────────
# SQLite
# ──────────────────────────────────────────────

class TestSQLiteCursorStore:
    @staticmethod
    def _rows(store):
        return [tuple(r) for r in store._conn.execute("SELECT source_id, value FROM cursors")]

    def test_missing_cursor_reads_zero_and_creates_row(self, sqlite_store):
        assert self._rows(sqlite_store) == []
        assert sqlite_store.get("acct") == "0"
        assert self._rows(sqlite_store) == [("acct", "0")]

    def test_set_then_get(self, sqlite_store):
        sqlite_store.set("acct", "113000000000000001")
        assert sqlite_store.get("acct") == "113000000000000001"

    def test_set_overwrites_unconditionally(self, sqlite_store):
        sqlite_store.set("acct", "50")
        sqlite_store.set("acct", "20")
        assert sqlite_store.get("acct") == "20"

    def test_sources_are_independent(self, sqlite_store):
        sqlite_store.set("a", "10")
        assert sqlite_store.get("b") == "0"
        assert sqlite_store.get("a") == "10"

    def test_persists_across_connections(self, tmp_db_path):
        store = SQLiteCursorStore(tmp_db_path)
        store.set("acct", "99")
        store.close()

        reopened = SQLiteCursorStore(tmp_db_path)
        assert reopened.get("acct") == "99"
        reopened.close()

    def test_rejects_non_numeric_value(self, sqlite_store):
        with pytest.raises(StoreError):
            sqlite_store.set("acct", "12a")
        assert sqlite_store.get("acct") == "0"

    def test_corrupt_stored_value(self, sqlite_store):
        sqlite_store._conn.execute(
            "INSERT INTO cursors (source_id, value) VALUES (?, ?)", ("acct", "garbage")
        )
        sqlite_store._conn.commit()
        with pytest.raises(StoreError):
            sqlite_store.get("acct")

    def test_closed_connection_raises_store_error(self, tmp_db_path):
        store = SQLiteCursorStore(tmp_db_path)
        store.close()
        with pytest.raises(StoreError):
            store.get("acct")


# ──────────────────────────────────────────────
# DynamoDB
# ──────────────────────────────────────────────

class TestDynamoCursorStore:
    def test_missing_cursor_initializes(self):
        table = FakeTable()
        store = DynamoCursorStore("unused", table=table)
        assert store.get("acct") == "0"
        assert table.puts == [{"account": "acct", "value": "0"}]

    def test_existing_cursor(self):
        table = FakeTable()
        table.items["acct"] = {"account": "acct", "value": "113000000000000001"}
        store = DynamoCursorStore("unused", table=table)
        assert store.get("acct") == "113000000000000001"
        assert table.puts == []

    def test_set(self):
        table = FakeTable()
        store = DynamoCursorStore("unused", table=table)
        store.set("acct", "42")
        assert table.items["acct"]["value"] == "42"

    def test_read_failure(self):
        store = DynamoCursorStore("unused", table=FakeTable(fail_on="GetItem"))
        with pytest.raises(StoreError):
            store.get("acct")

    def test_write_failure(self):
        store = DynamoCursorStore("unused", table=FakeTable(fail_on="PutItem"))
        with pytest.raises(StoreError):
            store.set("acct", "1")

    def test_requires_table_name(self):
        with pytest.raises(StoreError):
            DynamoCursorStore("")


# ──────────────────────────────────────────────
# Factory
# ──────────────────────────────────────────────

class TestCreateStore:
    def test_sqlite(self, tmp_db_path):
        store = create_store(Config(cursor_backend="sqlite", db_path=tmp_db_path))
        assert isinstance(store, SQLiteCursorStore)
        store.close()

    def test_unknown_backend(self):
        with pytest.raises(StoreError):
            create_store(Config(cursor_backend="redis"))
