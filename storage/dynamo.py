"""
DynamoDB cursor store, for serverless deployments where no local disk survives
between invocations.

Table layout: partition key `account` (S), attribute `value` (S).
"""

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from storage.base import CursorStore, StoreError, DEFAULT_CURSOR, validate_cursor

log = logging.getLogger(__name__)


class DynamoCursorStore(CursorStore):
    def __init__(self, table_name: str, region: str = "", table=None):
        if table is None:
            if not table_name:
                raise StoreError("DynamoDB table name not set (RELAY_TABLE_NAME or TABLE_NAME)")
            dynamodb = boto3.resource("dynamodb", region_name=region or None)
            table = dynamodb.Table(table_name)
        self._table = table

    def get(self, source_id: str) -> str:
        try:
            response = self._table.get_item(Key={"account": source_id})
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Cursor read failed for {source_id}: {e}") from e

        item = response.get("Item")
        if not item:
            log.info(f"No cursor for {source_id}, initializing to {DEFAULT_CURSOR}")
            self.set(source_id, DEFAULT_CURSOR)
            return DEFAULT_CURSOR

        return validate_cursor(str(item.get("value") or DEFAULT_CURSOR))

    def set(self, source_id: str, value: str):
        validate_cursor(value)
        try:
            self._table.put_item(Item={"account": source_id, "value": value})
        except (ClientError, BotoCoreError) as e:
            raise StoreError(f"Cursor write failed for {source_id}: {e}") from e
