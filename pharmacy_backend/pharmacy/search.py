from __future__ import annotations

import logging
import threading

from .cache import PharmacyCache
from .data_store import PharmacyRepository
from .models import PharmacyRecord

logger = logging.getLogger(__name__)


class PharmacySearchService:
    """Candidate pharmacies for ranking: the cache if it has any, else the primary store."""

    def __init__(self, cache: PharmacyCache, repository: PharmacyRepository) -> None:
        self._cache = cache
        self._repository = repository
        # Endpoints run in a threadpool; counters are shared across requests.
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def search(self) -> list[PharmacyRecord]:
        cached = self._cache.find_all()
        if cached:
            with self._lock:
                self._hits += 1
            return cached
        with self._lock:
            self._misses += 1
        logger.info("Pharmacy cache is empty, reading the primary store")
        return self._repository.find_all()

    def warm_cache(self) -> int:
        records = self._repository.find_all()
        for record in records:
            self._cache.save(record)
        logger.info("Warmed pharmacy cache with %d records", len(records))
        return len(records)

    def stats(self) -> dict:
        with self._lock:
            hits, misses = self._hits, self._misses
        total = hits + misses
        return {
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / total * 100, 1) if total > 0 else 0.0,
        }
