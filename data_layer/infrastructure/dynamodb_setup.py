"""DynamoDB tablo oluşturma ve varsayılan katalog yükleme.

Tek tablo: StockAppData (key -> JSON değer)

Kullanım:
    python -m data_layer.infrastructure.dynamodb_setup             # Kur ve yükle
    python -m data_layer.infrastructure.dynamodb_setup --delete    # Tabloyu sil
"""
import os
import sys

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))
import env_loader  # noqa: F401

from src.engine.catalog import DEFAULT_LOCATIONS, DEFAULT_SECTIONS, DEFAULT_STAFF, DEFAULT_THRESHOLDS
from src.storage.base import (
    LOCATIONS_KEY,
    LOGS_KEY,
    SECTIONS_KEY,
    STAFF_KEY,
    THRESHOLDS_KEY,
    TRANSFERS_KEY,
    KeyValueStore,
)

REGION = os.environ.get("AWS_DEFAULT_REGION", "us-west-2")
TABLE_NAME = os.environ.get("STOCK_TABLE", "StockAppData")
BOTO_CONFIG = Config(retries={"max_attempts": 3})

TABLE_DEFINITION = {
    "TableName": TABLE_NAME,
    "KeySchema": [
        {"AttributeName": "key", "KeyType": "HASH"},
    ],
    "AttributeDefinitions": [
        {"AttributeName": "key", "AttributeType": "S"},
    ],
    "BillingMode": "PAY_PER_REQUEST",
}


def create_table(region: str = REGION):
    """StockAppData tablosunu oluşturur (varsa atlar)."""
    dynamodb = boto3.client("dynamodb", region_name=region, config=BOTO_CONFIG)
    try:
        dynamodb.describe_table(TableName=TABLE_NAME)
        print(f"  ⏭️  {TABLE_NAME} zaten mevcut, atlanıyor")
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceNotFoundException":
            print(f"  🔨 {TABLE_NAME} oluşturuluyor...")
            dynamodb.create_table(**TABLE_DEFINITION)
            # Tablonun aktif olmasını bekle
            waiter = dynamodb.get_waiter("table_exists")
            waiter.wait(TableName=TABLE_NAME)
            print(f"  ✓  {TABLE_NAME} oluşturuldu")
        else:
            raise


def seed_defaults(store: KeyValueStore) -> list[str]:
    """Eksik anahtarlara varsayılan katalog değerlerini yazar; yazılan anahtarları döndürür."""
    defaults = {
        THRESHOLDS_KEY: dict(DEFAULT_THRESHOLDS),
        STAFF_KEY: [s.to_dict() for s in DEFAULT_STAFF],
        SECTIONS_KEY: [s.to_dict() for s in DEFAULT_SECTIONS],
        LOCATIONS_KEY: list(DEFAULT_LOCATIONS),
        LOGS_KEY: {},
        TRANSFERS_KEY: [],
    }
    written = []
    for key, value in defaults.items():
        if store.load(key, None) is not None:
            print(f"  ⏭️  {key} zaten dolu, atlanıyor")
            continue
        store.save(key, value)
        written.append(key)
        print(f"  ✓  {key} yüklendi")
    return written


def delete_table(region: str = REGION):
    """Tabloyu siler (dikkatli kullan)."""
    dynamodb = boto3.client("dynamodb", region_name=region, config=BOTO_CONFIG)
    try:
        dynamodb.delete_table(TableName=TABLE_NAME)
        print(f"  🗑️  {TABLE_NAME} silindi")
    except ClientError:
        print(f"  ⏭️  {TABLE_NAME} bulunamadı, atlanıyor")


if __name__ == "__main__":
    from src.storage.dynamodb_store import DynamoDBStore

    if len(sys.argv) > 1 and sys.argv[1] == "--delete":
        print("🗑️  Tablo siliniyor...")
        delete_table()
    else:
        print("🏗️  DynamoDB tablosu oluşturuluyor...\n")
        create_table()
        print("\n📤 Varsayılan katalog yükleniyor...\n")
        seed_defaults(DynamoDBStore(table_name=TABLE_NAME, region_name=REGION))
        print("\n✅ Hazır!")
