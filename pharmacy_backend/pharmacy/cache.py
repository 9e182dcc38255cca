from __future__ import annotations

import logging

from pydantic import ValidationError

from .config import DEFAULT_CACHE_CONFIG, CacheConfig
from .kv_store import KeyValueStore
from .models import PharmacyRecord

logger = logging.getLogger(__name__)


class PharmacyCache:
    """
    JSON snapshots of pharmacy records, one entry per pharmacy id.

    The cache is never authoritative. Every failure is logged and swallowed
    here so that a broken cache backend only costs a trip to the primary
    store.
    """

    def __init__(self, store: KeyValueStore, config: CacheConfig = DEFAULT_CACHE_CONFIG) -> None:
        self._store = store
        self._namespace = config.namespace

    def save(self, record: PharmacyRecord | None) -> None:
        if record is None or record.id is None:
            logger.error("Refusing to cache a pharmacy without an id: %r", record)
            return
        try:
            self._store.set(self._namespace, str(record.id), record.model_dump_json())
        except Exception:
            logger.warning("Could not cache pharmacy %s", record.id, exc_info=True)
            return
        logger.debug("Cached pharmacy %s", record.id)

    def find_all(self) -> list[PharmacyRecord]:
        try:
            raw_entries = self._store.entries(self._namespace)
        except Exception:
            logger.warning("Could not read pharmacy cache", exc_info=True)
            return []

        records: list[PharmacyRecord] = []
        for key, value in raw_entries.items():
            try:
                records.append(PharmacyRecord.model_validate_json(value))
            except (ValidationError, TypeError):
                logger.warning("Skipping unreadable cache entry %s", key, exc_info=True)
        return records

    def delete(self, pharmacy_id: int) -> None:
        try:
            self._store.delete(self._namespace, str(pharmacy_id))
        except Exception:
            logger.warning("Could not evict pharmacy %s from cache", pharmacy_id, exc_info=True)
            return
        logger.info("Evicted pharmacy %s from cache", pharmacy_id)
