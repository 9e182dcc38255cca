from __future__ import annotations

import logging
import time
from typing import Callable

import requests
from pydantic import ValidationError

from ..geo import ResolvedAddress
from .config import DEFAULT_KAKAO_CONFIG, KakaoConfig
from .models import KakaoAddressResponse
from .retry import DEFAULT_RETRY_POLICY, RetryPolicy, UpstreamError, call_with_retry, fetch_json

logger = logging.getLogger(__name__)


class GeocodeClient:
    """
    Resolve free-form addresses through the Kakao address search API.

    ``resolve`` never raises for upstream trouble: once the retry policy is
    exhausted (or the failure is not worth retrying) it returns ``fallback``,
    which defaults to ``None`` and means "no match".
    """

    def __init__(
        self,
        config: KakaoConfig = DEFAULT_KAKAO_CONFIG,
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        fallback: ResolvedAddress | None = None,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config
        self._retry_policy = retry_policy
        self._fallback = fallback
        self._session = session or requests.Session()
        self._sleep = sleep

    def resolve(self, address: str) -> ResolvedAddress | None:
        query = (address or "").strip()
        if not query:
            return self._fallback
        if not self._config.api_key:
            logger.warning("KAKAO_REST_API_KEY is not set, skipping address search")
            return self._fallback

        try:
            body = call_with_retry(
                lambda: self._request(query),
                policy=self._retry_policy,
                sleep=self._sleep,
            )
            response = KakaoAddressResponse.model_validate(body)
            if not response.documents:
                logger.info("Address search found no match for %r", query)
                return self._fallback
            resolved = response.documents[0].to_resolved()
        except (UpstreamError, ValidationError):
            logger.warning("Address search failed for %r, degrading to no match", query, exc_info=True)
            return self._fallback

        logger.info("Resolved %r to %s", query, resolved)
        return resolved

    def _request(self, query: str) -> dict:
        return fetch_json(
            self._session,
            self._config.address_search_url,
            params={"query": query},
            headers=self._config.auth_header,
            timeout=self._config.timeout,
        )
