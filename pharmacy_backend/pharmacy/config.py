from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class CacheConfig:
    redis_url: str = os.getenv("REDIS_URL", "")
    namespace: str = "PHARMACY"
    data_csv: Path = Path(
        os.getenv(
            "PHARMACY_DATA_CSV",
            str(Path(__file__).resolve().parent.parent / "data" / "pharmacies.csv"),
        )
    )


DEFAULT_CACHE_CONFIG = CacheConfig()
