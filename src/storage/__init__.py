import os
from pathlib import Path

from src.storage.base import KeyValueStore
from src.storage.dynamodb_store import DynamoDBStore
from src.storage.local_cache import LocalCache
from src.storage.memory_store import MemoryStore


def create_store() -> KeyValueStore:
    """STOCK_STORE ortam değişkenine göre depo oluşturur (dynamodb | memory)."""
    kind = os.environ.get("STOCK_STORE", "dynamodb").lower()
    if kind == "memory":
        return MemoryStore()
    return DynamoDBStore(
        table_name=os.environ.get("STOCK_TABLE", "StockAppData"),
        region_name=os.environ.get("AWS_DEFAULT_REGION", "us-west-2"),
        cache_dir=Path(os.environ.get("STOCK_CACHE_DIR", ".stock_cache")),
    )


__all__ = [
    "DynamoDBStore",
    "KeyValueStore",
    "LocalCache",
    "MemoryStore",
    "create_store",
]
