from __future__ import annotations

import logging
import time
from typing import Callable

import requests
from pydantic import ValidationError

from ..geo import Coordinate
from .config import DEFAULT_KAKAO_CONFIG, KakaoConfig
from .models import KakaoCategoryResponse, KakaoPlace
from .retry import DEFAULT_RETRY_POLICY, RetryPolicy, UpstreamError, call_with_retry, fetch_json

logger = logging.getLogger(__name__)


class CategorySearchClient:
    """Pharmacies around a point, pre-sorted by Kakao from nearest to farthest."""

    def __init__(
        self,
        config: KakaoConfig = DEFAULT_KAKAO_CONFIG,
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config
        self._retry_policy = retry_policy
        self._session = session or requests.Session()
        self._sleep = sleep

    def build_params(self, origin: Coordinate, radius_km: float) -> dict[str, str | int | float]:
        return {
            "category_group_code": self._config.pharmacy_category,
            "x": origin.longitude,
            "y": origin.latitude,
            "radius": int(radius_km * 1000),
            "sort": "distance",
        }

    def search(self, origin: Coordinate, radius_km: float) -> list[KakaoPlace]:
        if not self._config.api_key:
            logger.warning("KAKAO_REST_API_KEY is not set, skipping category search")
            return []

        params = self.build_params(origin, radius_km)
        try:
            body = call_with_retry(
                lambda: fetch_json(
                    self._session,
                    self._config.category_search_url,
                    params=params,
                    headers=self._config.auth_header,
                    timeout=self._config.timeout,
                ),
                policy=self._retry_policy,
                sleep=self._sleep,
            )
            places = KakaoCategoryResponse.model_validate(body).documents
        except (UpstreamError, ValidationError):
            logger.warning("Category search failed around %s", origin, exc_info=True)
            return []

        logger.info("Category search returned %d places within %.1fkm", len(places), radius_km)
        return places
