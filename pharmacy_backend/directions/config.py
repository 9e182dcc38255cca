from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class DirectionConfig:
    base_url: str = os.getenv("DIRECTION_BASE_URL", "http://localhost:8000/dir/")
    road_view_base_url: str = "https://map.kakao.com/link/roadview/"
    map_base_url: str = "https://map.kakao.com/link/map/"
    radius_km: float = 10.0
    max_results: int = 3
    use_category_search: bool = os.getenv("USE_CATEGORY_SEARCH", "false").lower() in ("1", "true", "yes")


DEFAULT_DIRECTION_CONFIG = DirectionConfig()
