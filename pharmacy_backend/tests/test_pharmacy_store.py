from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest

from pharmacy_backend.geo import Coordinate
from pharmacy_backend.pharmacy.cache import PharmacyCache
from pharmacy_backend.pharmacy.data_store import (
    PharmacyNotFoundError,
    PharmacyRepository,
    load_pharmacies_csv,
)
from pharmacy_backend.pharmacy.kv_store import InMemoryKeyValueStore
from pharmacy_backend.pharmacy.models import PharmacyRecord
from pharmacy_backend.pharmacy.search import PharmacySearchService


def _pharmacy(pid, name):
    return PharmacyRecord(
        id=pid,
        name=name,
        address=f"서울시 {name}",
        location=Coordinate(latitude=37.5 + pid / 100, longitude=127.0),
    )


def test_save_all_and_find():
    repo = PharmacyRepository()
    saved = repo.save_all([_pharmacy(1, "약국1"), _pharmacy(2, "약국2")])

    assert len(saved) == 2
    assert repo.find_by_id(2).name == "약국2"
    assert {p.id for p in repo.find_all()} == {1, 2}


def test_save_all_empty_list():
    assert PharmacyRepository().save_all([]) == []


def test_update_address():
    repo = PharmacyRepository([_pharmacy(1, "약국1")])

    updated = repo.update_address(1, "서울시 송파구")

    assert updated.address == "서울시 송파구"
    assert repo.find_by_id(1).address == "서울시 송파구"


def test_update_address_unknown_id():
    with pytest.raises(PharmacyNotFoundError):
        PharmacyRepository().update_address(42, "어딘가")


def test_load_csv(tmp_path):
    path = tmp_path / "pharmacies.csv"
    path.write_text(
        "id,name,address,latitude,longitude\n"
        "1, 종암약국 ,서울 성북구,37.602030,127.037033\n"
        "2,좌표없음,서울,,127.0\n"
        "3,화랑약국,,37.606203,127.042567\n",
        encoding="utf-8",
    )

    records = load_pharmacies_csv(path)

    assert [r.id for r in records] == [1, 3]
    assert records[0].name == "종암약국"
    assert records[1].address == ""
    assert records[1].location.longitude == 127.042567


def test_load_csv_missing_file(tmp_path):
    assert load_pharmacies_csv(tmp_path / "nope.csv") == []


# ── PharmacySearchService ────────────────────────────────────────────────


def test_search_prefers_cache():
    cache = PharmacyCache(InMemoryKeyValueStore())
    cache.save(_pharmacy(1, "캐시약국"))
    repo = MagicMock()
    service = PharmacySearchService(cache, repo)

    results = service.search()

    assert [r.name for r in results] == ["캐시약국"]
    repo.find_all.assert_not_called()
    assert service.stats()["hits"] == 1


def test_search_falls_back_to_primary_store():
    cache = PharmacyCache(InMemoryKeyValueStore())
    repo = PharmacyRepository([_pharmacy(1, "원본약국")])
    service = PharmacySearchService(cache, repo)

    assert [r.name for r in service.search()] == ["원본약국"]
    assert service.stats() == {"hits": 0, "misses": 1, "hit_rate": 0.0}


def test_warm_cache_copies_primary_store():
    cache = PharmacyCache(InMemoryKeyValueStore())
    repo = PharmacyRepository([_pharmacy(1, "약국1"), _pharmacy(2, "약국2")])
    service = PharmacySearchService(cache, repo)

    assert service.warm_cache() == 2
    assert {r.id for r in cache.find_all()} == {1, 2}
    service.search()
    assert service.stats()["hit_rate"] == 100.0


def test_stats_count_every_concurrent_search():
    cache = PharmacyCache(InMemoryKeyValueStore())
    cache.save(_pharmacy(1, "약국1"))
    service = PharmacySearchService(cache, PharmacyRepository([]))

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: service.search(), range(400)))

    assert service.stats() == {"hits": 400, "misses": 0, "hit_rate": 100.0}
