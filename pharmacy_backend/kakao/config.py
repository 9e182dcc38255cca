from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class KakaoConfig:
    api_key: str = os.getenv("KAKAO_REST_API_KEY", "")
    base_url: str = os.getenv("KAKAO_API_BASE_URL", "https://dapi.kakao.com/")
    auth_scheme: str = "KakaoAK"
    timeout: float = float(os.getenv("KAKAO_TIMEOUT", "5.0"))
    pharmacy_category: str = "PM9"

    @property
    def address_search_url(self) -> str:
        return self.base_url.rstrip("/") + "/v2/local/search/address.json"

    @property
    def category_search_url(self) -> str:
        return self.base_url.rstrip("/") + "/v2/local/search/category.json"

    @property
    def auth_header(self) -> dict[str, str]:
        return {"Authorization": f"{self.auth_scheme} {self.api_key}"}


DEFAULT_KAKAO_CONFIG = KakaoConfig()
