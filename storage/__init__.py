from config.settings import Config
from storage.base import CursorStore, StoreError, DEFAULT_CURSOR
from storage.db import SQLiteCursorStore


def create_store(config: Config) -> CursorStore:
    """Build the cursor store the config asks for."""
    backend = config.cursor_backend.lower()

    if backend == "sqlite":
        return SQLiteCursorStore(config.db_path)
    elif backend == "dynamodb":
        from storage.dynamo import DynamoCursorStore
        return DynamoCursorStore(config.dynamodb_table, region=config.aws_region)
    else:
        raise StoreError(
            f"Unknown cursor backend: '{backend}'. "
            f"Set RELAY_CURSOR_BACKEND to 'sqlite' or 'dynamodb'."
        )


__all__ = [
    "CursorStore",
    "StoreError",
    "DEFAULT_CURSOR",
    "SQLiteCursorStore",
    "create_store",
]
