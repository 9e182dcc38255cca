from unittest.mock import MagicMock, patch

from pharmacy_backend.geo import Coordinate
from pharmacy_backend.pharmacy.cache import PharmacyCache
from pharmacy_backend.pharmacy.config import CacheConfig
from pharmacy_backend.pharmacy.kv_store import (
    InMemoryKeyValueStore,
    RedisKeyValueStore,
    build_key_value_store,
)
from pharmacy_backend.pharmacy.models import PharmacyRecord

PHARMACY = PharmacyRecord(
    id=1,
    name="종암온누리약국",
    address="서울특별시 성북구 종암로 129",
    location=Coordinate(latitude=37.602030, longitude=127.037033),
)
OTHER = PharmacyRecord(
    id=2,
    name="화랑대로약국",
    address="서울특별시 성북구 화랑로 211",
    location=Coordinate(latitude=37.606203, longitude=127.042567),
)


def _cache():
    store = InMemoryKeyValueStore()
    return PharmacyCache(store), store


def test_save_then_find_all_round_trips():
    cache, _ = _cache()
    cache.save(PHARMACY)

    assert cache.find_all() == [PHARMACY]


def test_entries_are_json_under_the_pharmacy_namespace():
    cache, store = _cache()
    cache.save(PHARMACY)

    raw = store.get("PHARMACY", "1")
    assert raw is not None
    assert PharmacyRecord.model_validate_json(raw) == PHARMACY


def test_save_overwrites_same_id():
    cache, _ = _cache()
    cache.save(PHARMACY)
    cache.save(PHARMACY.model_copy(update={"address": "새 주소"}))

    records = cache.find_all()
    assert len(records) == 1
    assert records[0].address == "새 주소"


def test_delete_removes_entry():
    cache, _ = _cache()
    cache.save(PHARMACY)
    cache.save(OTHER)

    cache.delete(1)

    assert [r.id for r in cache.find_all()] == [2]


def test_delete_missing_id_is_a_no_op():
    cache, _ = _cache()
    cache.save(PHARMACY)

    cache.delete(999)

    assert cache.find_all() == [PHARMACY]


def test_save_none_is_skipped_without_error():
    cache, store = _cache()
    cache.save(None)

    assert store.entries("PHARMACY") == {}


def test_malformed_entries_are_skipped():
    cache, store = _cache()
    cache.save(PHARMACY)
    store.set("PHARMACY", "7", "{not json")
    store.set("PHARMACY", "8", '{"id": 8}')

    assert cache.find_all() == [PHARMACY]


def test_store_read_failure_returns_empty_list():
    store = MagicMock()
    store.entries.side_effect = ConnectionError("redis down")
    cache = PharmacyCache(store)

    assert cache.find_all() == []


def test_store_write_failure_is_absorbed():
    store = MagicMock()
    store.set.side_effect = ConnectionError("redis down")
    store.delete.side_effect = ConnectionError("redis down")
    cache = PharmacyCache(store)

    cache.save(PHARMACY)
    cache.delete(1)

    store.set.assert_called_once()


def test_custom_namespace():
    store = InMemoryKeyValueStore()
    cache = PharmacyCache(store, CacheConfig(namespace="TEST_PHARMACY"))
    cache.save(PHARMACY)

    assert "1" in store.entries("TEST_PHARMACY")
    assert store.entries("PHARMACY") == {}


# ── Redis backend ────────────────────────────────────────────────────────


def test_redis_store_uses_hash_operations():
    client = MagicMock()
    client.hgetall.return_value = {"1": PHARMACY.model_dump_json()}
    cache = PharmacyCache(RedisKeyValueStore(client))

    cache.save(PHARMACY)
    records = cache.find_all()
    cache.delete(1)

    client.hset.assert_called_once_with("PHARMACY", "1", PHARMACY.model_dump_json())
    client.hgetall.assert_called_once_with("PHARMACY")
    client.hdel.assert_called_once_with("PHARMACY", "1")
    assert records == [PHARMACY]


def test_build_store_defaults_to_memory():
    assert isinstance(build_key_value_store(CacheConfig(redis_url="")), InMemoryKeyValueStore)


@patch("pharmacy_backend.pharmacy.kv_store.redis.Redis.from_url")
def test_build_store_uses_redis_url(mock_from_url):
    store = build_key_value_store(CacheConfig(redis_url="redis://localhost:6379/0"))

    assert isinstance(store, RedisKeyValueStore)
    mock_from_url.assert_called_once_with("redis://localhost:6379/0", decode_responses=True)
