"""DynamoDB tabanlı anahtar-değer deposu.

Tablo yapısı (varsayılan ad: StockAppData):
    key (HASH)  -> "logs", "xfers", "thresholds", "staff", ...
    value       -> JSON string olarak tüm değer
    updated_at  -> ISO zaman damgası

Her yazma yerel önbelleğe de kaydedilir. DynamoDB hatası olursa okuma ve
yazma önbellek üzerinden devam eder. DynamoDB anlık bildirim sağlamadığı
için abonelikler `poll()` çağrısıyla güncellenir.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import boto3
from botocore.exceptions import ClientError

from src.storage.base import KeyValueStore
from src.storage.local_cache import LocalCache

logger = logging.getLogger(__name__)

DEFAULT_TABLE_NAME = "StockAppData"


class DynamoDBStore(KeyValueStore):
    def __init__(
        self,
        table_name: str = DEFAULT_TABLE_NAME,
        region_name: str = "us-west-2",
        cache_dir: Path = Path(".stock_cache"),
        dynamodb_resource: Optional[Any] = None,
    ) -> None:
        super().__init__()
        self.table_name = table_name
        self.region_name = region_name
        # dependency injection destekli
        self.dynamodb = dynamodb_resource or boto3.resource("dynamodb", region_name=region_name)
        self.table = self.dynamodb.Table(table_name)
        self.cache = LocalCache(cache_dir)
        # Son görülen sürümler: {key: updated_at}
        self._versions: dict[str, str] = {}

        logger.info("DynamoDB deposu hazır: %s (%s)", table_name, region_name)

    def _get_item(self, key: str) -> Optional[dict]:
        response = self.table.get_item(Key={"key": key})
        return response.get("Item")

    def load(self, key: str, default: Any = None) -> Any:
        try:
            item = self._get_item(key)
        except ClientError as e:
            logger.error("DynamoDB okuma hatası [%s], önbellek kullanılıyor: %s", key, e)
            return self.cache.read(key, default)

        if not item:
            return default
        self._versions[key] = item.get("updated_at", "")
        value = json.loads(item["value"])
        self.cache.write(key, value)
        return value

    def save(self, key: str, value: Any) -> None:
        updated_at = datetime.now().isoformat()
        try:
            self.table.put_item(
                Item={
                    "key": key,
                    "value": json.dumps(value, ensure_ascii=False),
                    "updated_at": updated_at,
                }
            )
            self._versions[key] = updated_at
            logger.info("Kaydedildi: %s", key)
        except ClientError as e:
            logger.error("DynamoDB yazma hatası [%s], yalnızca önbelleğe yazılıyor: %s", key, e)
        self.cache.write(key, value)

    def poll(self) -> list[str]:
        """Abone olunan anahtarları yeniden okur; değişenler için aboneleri bilgilendirir.

        Returns:
            Değişen anahtarların listesi.
        """
        changed: list[str] = []
        for key, callbacks in list(self._subscribers.items()):
            if not callbacks:
                continue
            try:
                item = self._get_item(key)
            except ClientError as e:
                logger.warning("Senkronizasyon hatası [%s]: %s", key, e)
                continue
            if not item:
                continue
            version = item.get("updated_at", "")
            if version == self._versions.get(key):
                continue
            self._versions[key] = version
            value = json.loads(item["value"])
            self.cache.write(key, value)
            changed.append(key)
            self._notify(key, value)
        return changed
