from __future__ import annotations

import logging
import threading
from pathlib import Path

import pandas as pd

from ..geo import Coordinate
from .models import PharmacyRecord

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["id", "name", "address", "latitude", "longitude"]


class PharmacyNotFoundError(LookupError):
    pass


class PharmacyRepository:
    """Primary, authoritative pharmacy store kept in process memory."""

    def __init__(self, records: list[PharmacyRecord] | None = None) -> None:
        self._lock = threading.Lock()
        self._records: dict[int, PharmacyRecord] = {}
        if records:
            self.save_all(records)

    def save_all(self, records: list[PharmacyRecord]) -> list[PharmacyRecord]:
        if not records:
            return []
        with self._lock:
            for record in records:
                self._records[record.id] = record
        return list(records)

    def find_all(self) -> list[PharmacyRecord]:
        with self._lock:
            return list(self._records.values())

    def find_by_id(self, pharmacy_id: int) -> PharmacyRecord | None:
        with self._lock:
            return self._records.get(pharmacy_id)

    def update_address(self, pharmacy_id: int, address: str) -> PharmacyRecord:
        with self._lock:
            current = self._records.get(pharmacy_id)
            if current is None:
                raise PharmacyNotFoundError(f"pharmacy {pharmacy_id} does not exist")
            updated = current.model_copy(update={"address": address})
            self._records[pharmacy_id] = updated
        return updated


def load_pharmacies_csv(path: Path) -> list[PharmacyRecord]:
    """Read seed pharmacies; a missing file means an empty catalogue."""
    if not path.exists():
        logger.info("No pharmacy seed file at %s", path)
        return []

    df = pd.read_csv(path, usecols=CSV_COLUMNS)
    df = df.dropna(subset=["id", "latitude", "longitude"])
    df["name"] = df["name"].fillna("").astype(str).str.strip()
    df["address"] = df["address"].fillna("").astype(str).str.strip()

    records = [
        PharmacyRecord(
            id=int(row.id),
            name=row.name,
            address=row.address,
            location=Coordinate(latitude=float(row.latitude), longitude=float(row.longitude)),
        )
        for row in df.itertuples(index=False)
    ]
    logger.info("Loaded %d pharmacies from %s", len(records), path)
    return records
