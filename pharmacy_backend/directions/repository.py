from __future__ import annotations

import itertools
import threading
from datetime import datetime, timezone
from typing import Protocol

from .models import RecommendationRecord


class RecommendationRepository(Protocol):
    def save_all(self, records: list[RecommendationRecord]) -> list[RecommendationRecord]: ...

    def find_by_id(self, recommendation_id: int) -> RecommendationRecord | None: ...


class InMemoryRecommendationRepository:
    """Append-only store. Ids start at 1 and are never reused."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._records: dict[int, RecommendationRecord] = {}

    def save_all(self, records: list[RecommendationRecord]) -> list[RecommendationRecord]:
        if not records:
            return []
        created_at = datetime.now(timezone.utc)
        with self._lock:
            saved = [
                record.model_copy(update={"id": next(self._ids), "created_at": created_at})
                for record in records
            ]
            for record in saved:
                self._records[record.id] = record
        return saved

    def find_by_id(self, recommendation_id: int) -> RecommendationRecord | None:
        with self._lock:
            return self._records.get(recommendation_id)

    def count(self) -> int:
        with self._lock:
            return len(self._records)
