"""Tests for the local data cache."""

import json

import pytest

from homematic_ccu_api import cache as cache_module
from homematic_ccu_api.cache import DataCache, validate_key
from homematic_ccu_api.exceptions import CCUCacheError, CCUInvalidArgumentError


class TestValidateKey:
    """Test cache key validation."""

    @pytest.mark.parametrize("key", ["devices", "device.ABC123", "channel.ABC123.5", "a" * 64])
    def test_valid_keys(self, key) -> None:
        assert validate_key(key) == key

    @pytest.mark.parametrize(
        "key", ["", None, 5, "a" * 65, "device/ABC", "ABC:1", "a{b}", "a(b)", "a@b", "a\\b"]
    )
    def test_invalid_keys(self, key) -> None:
        with pytest.raises(CCUInvalidArgumentError):
            validate_key(key)

    def test_invalid_argument_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            validate_key("")


class TestDataCache:
    """Test DataCache."""

    def test_set_get_delete(self) -> None:
        cache = DataCache()
        assert cache.get("devices") is None
        cache.set("devices", {"a": 1})
        assert cache.get("devices") == {"a": 1}
        assert cache.has("devices")
        assert cache.delete("devices") is True
        assert cache.delete("devices") is False
        assert not cache.has("devices")

    def test_falsy_values_are_hits(self) -> None:
        cache = DataCache()
        cache.set("empty", {})
        assert cache.has("empty")
        assert cache.get("empty", "default") == {}

    def test_entries_expire_after_ttl(self, monkeypatch) -> None:
        now = [1000.0]
        monkeypatch.setattr(cache_module.time, "time", lambda: now[0])
        cache = DataCache(ttl=10)
        cache.set("devices", [1])
        now[0] += 9
        assert cache.get("devices") == [1]
        now[0] += 2
        assert cache.get("devices") is None

    def test_zero_ttl_never_expires(self, monkeypatch) -> None:
        now = [1000.0]
        monkeypatch.setattr(cache_module.time, "time", lambda: now[0])
        cache = DataCache(ttl=0)
        cache.set("devices", [1])
        now[0] += 10 ** 6
        assert cache.get("devices") == [1]

    def test_negative_ttl_rejected(self) -> None:
        with pytest.raises(ValueError):
            DataCache(ttl=-1)

    def test_get_or_load_calls_loader_on_miss_only(self) -> None:
        cache = DataCache()
        calls = []

        def loader():
            calls.append(1)
            return {"x": 1}

        assert cache.get_or_load("k", loader) == {"x": 1}
        assert cache.get_or_load("k", loader) == {"x": 1}
        assert len(calls) == 1

    def test_get_or_load_error_stores_nothing(self) -> None:
        cache = DataCache()

        def loader():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            cache.get_or_load("k", loader)
        assert not cache.has("k")

    def test_get_or_load_validates_key_first(self) -> None:
        cache = DataCache()
        calls = []
        with pytest.raises(CCUInvalidArgumentError):
            cache.get_or_load("bad/key", lambda: calls.append(1))
        assert calls == []

    def test_clear(self) -> None:
        cache = DataCache()
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert not cache.has("a")
        assert not cache.has("b")


class TestDataCachePersistence:
    """Test the JSON file backing of DataCache."""

    def test_entries_survive_reload(self, tmp_path) -> None:
        path = str(tmp_path / "cache.json")
        DataCache(ttl=0, path=path).set("device.ABC123", {"type": "HM-Sec"})
        assert DataCache(ttl=0, path=path).get("device.ABC123") == {"type": "HM-Sec"}

    def test_missing_file_means_empty_cache(self, tmp_path) -> None:
        cache = DataCache(path=str(tmp_path / "absent.json"))
        assert cache.get("devices") is None

    def test_corrupt_file_raises_cache_error(self, tmp_path) -> None:
        path = tmp_path / "cache.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CCUCacheError):
            DataCache(path=str(path)).get("devices")

    def test_non_object_file_raises_cache_error(self, tmp_path) -> None:
        path = tmp_path / "cache.json"
        path.write_text(json.dumps([1, 2]), encoding="utf-8")
        with pytest.raises(CCUCacheError):
            DataCache(path=str(path)).get("devices")

    def test_unwritable_location_raises_cache_error(self, tmp_path) -> None:
        cache = DataCache(path=str(tmp_path / "missing" / "cache.json"))
        with pytest.raises(CCUCacheError):
            cache.set("devices", [1])

    def test_unserializable_value_raises_cache_error(self, tmp_path) -> None:
        path = tmp_path / "cache.json"
        cache = DataCache(ttl=0, path=str(path))
        cache.set("kept", 1)
        with pytest.raises(CCUCacheError):
            cache.set("devices", object())
        assert not cache.has("devices")
        assert cache.get("kept") == 1
        assert not (tmp_path / "cache.json.tmp").exists()
        cache.set("other", 1)
        assert DataCache(ttl=0, path=str(path)).get("other") == 1

    def test_failed_write_keeps_previous_contents(self, tmp_path) -> None:
        cache = DataCache(ttl=0, path=str(tmp_path / "missing" / "cache.json"))
        with pytest.raises(CCUCacheError):
            cache.set("devices", [1])
        assert not cache.has("devices")

    def test_failed_clear_keeps_entries(self, tmp_path, monkeypatch) -> None:
        cache = DataCache(ttl=0, path=str(tmp_path / "cache.json"))
        cache.set("devices", [1])

        def fail(*args, **kwargs):
            raise OSError("read-only file system")

        monkeypatch.setattr(cache_module.os, "replace", fail)
        with pytest.raises(CCUCacheError):
            cache.clear()
        with pytest.raises(CCUCacheError):
            cache.delete("devices")
        assert cache.get("devices") == [1]
        assert not (tmp_path / "cache.json.tmp").exists()

    @pytest.mark.parametrize(
        "content",
        [
            {"device.ABC123": ["x"]},
            {"devices": 5},
            {"devices": {"stored_at": 1}},
            {"devices": {"value": [1], "stored_at": "yesterday"}},
        ],
        ids=["list-entry", "scalar-entry", "missing-value", "bad-timestamp"],
    )
    def test_malformed_entry_raises_cache_error(self, tmp_path, content) -> None:
        path = tmp_path / "cache.json"
        path.write_text(json.dumps(content), encoding="utf-8")
        with pytest.raises(CCUCacheError):
            DataCache(path=str(path)).get("devices")
