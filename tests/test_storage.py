"""Anahtar-değer depoları unit testleri."""

import json
from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from data_layer.infrastructure.dynamodb_setup import seed_defaults
from src.storage.dynamodb_store import DynamoDBStore
from src.storage.local_cache import LocalCache
from src.storage.memory_store import MemoryStore


def _client_error(operation: str) -> ClientError:
    return ClientError({"Error": {"Code": "InternalServerError", "Message": "boom"}}, operation)


def _create_store(tmp_path):
    """Test için mock'lanmış DynamoDB deposu oluşturur."""
    resource = MagicMock()
    table = MagicMock()
    resource.Table.return_value = table
    store = DynamoDBStore(cache_dir=tmp_path / "cache", dynamodb_resource=resource)
    return store, table


class TestMemoryStore:
    def test_load_default(self):
        assert MemoryStore().load("logs", {}) == {}

    def test_save_and_load_are_copies(self):
        store = MemoryStore()
        value = {"2026-10-19": []}
        store.save("logs", value)
        value["2026-10-20"] = []
        loaded = store.load("logs")
        assert loaded == {"2026-10-19": []}
        loaded["x"] = 1
        assert "x" not in store.load("logs")

    def test_subscribe_and_unsubscribe(self):
        store = MemoryStore()
        received = []
        unsubscribe = store.subscribe("thresholds", received.append)
        store.save("thresholds", {"default": 2})
        unsubscribe()
        store.save("thresholds", {"default": 3})
        assert received == [{"default": 2}]

    def test_failing_subscriber_does_not_block_others(self):
        store = MemoryStore()
        received = []

        def broken(value):
            raise RuntimeError("boom")

        store.subscribe("logs", broken)
        store.subscribe("logs", received.append)
        store.save("logs", {})
        assert received == [{}]


class TestLocalCache:
    def test_write_read(self, tmp_path):
        cache = LocalCache(tmp_path)
        cache.write("logs", {"a": 1})
        assert cache.read("logs") == {"a": 1}
        assert (tmp_path / "sns_logs.json").exists()

    def test_corrupt_file_returns_default(self, tmp_path):
        (tmp_path / "sns_logs.json").write_text("{not json", encoding="utf-8")
        assert LocalCache(tmp_path).read("logs", {}) == {}

    def test_clear(self, tmp_path):
        cache = LocalCache(tmp_path)
        cache.write("logs", {})
        cache.write("xfers", [])
        cache.clear()
        assert cache.read("logs") is None


class TestDynamoDBStore:
    def test_load_parses_json_value(self, tmp_path):
        store, table = _create_store(tmp_path)
        table.get_item.return_value = {"Item": {"key": "thresholds", "value": '{"default": 2}', "updated_at": "t1"}}
        assert store.load("thresholds") == {"default": 2}
        table.get_item.assert_called_with(Key={"key": "thresholds"})
        # Okunan değer önbelleğe de yazılır
        assert store.cache.read("thresholds") == {"default": 2}

    def test_load_missing_returns_default(self, tmp_path):
        store, table = _create_store(tmp_path)
        table.get_item.return_value = {}
        assert store.load("xfers", []) == []

    def test_load_error_falls_back_to_cache(self, tmp_path):
        store, table = _create_store(tmp_path)
        store.cache.write("logs", {"2026-10-19": []})
        table.get_item.side_effect = _client_error("GetItem")
        assert store.load("logs", {}) == {"2026-10-19": []}

    def test_save_writes_json(self, tmp_path):
        store, table = _create_store(tmp_path)
        store.save("xfers", [{"to_location": "Nedlands"}])
        item = table.put_item.call_args.kwargs["Item"]
        assert item["key"] == "xfers"
        assert json.loads(item["value"]) == [{"to_location": "Nedlands"}]
        assert item["updated_at"]

    def test_save_error_still_caches(self, tmp_path):
        store, table = _create_store(tmp_path)
        table.put_item.side_effect = _client_error("PutItem")
        store.save("thresholds", {"default": 2})
        assert store.cache.read("thresholds") == {"default": 2}

    def test_poll_notifies_on_new_version_only(self, tmp_path):
        store, table = _create_store(tmp_path)
        received = []
        store.subscribe("logs", received.append)

        table.get_item.return_value = {"Item": {"key": "logs", "value": "{}", "updated_at": "t1"}}
        assert store.poll() == ["logs"]
        assert store.poll() == []

        table.get_item.return_value = {"Item": {"key": "logs", "value": '{"2026-10-19": []}', "updated_at": "t2"}}
        assert store.poll() == ["logs"]
        assert received == [{}, {"2026-10-19": []}]

    def test_poll_skips_errors(self, tmp_path):
        store, table = _create_store(tmp_path)
        store.subscribe("logs", lambda value: None)
        table.get_item.side_effect = _client_error("GetItem")
        assert store.poll() == []


class TestSeedDefaults:
    def test_seeds_missing_keys_once(self):
        store = MemoryStore({"logs": {"2026-10-19": []}})
        written = seed_defaults(store)
        assert "logs" not in written
        assert set(written) == {"thresholds", "staff", "sections", "locations", "xfers"}
        assert store.load("thresholds")["default"] == 2
        assert seed_defaults(store) == []
