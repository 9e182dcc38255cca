from __future__ import annotations

import logging

from ..kakao.address_search import GeocodeClient
from ..kakao.category_search import CategorySearchClient
from ..pharmacy.search import PharmacySearchService
from .codec import ShortLinkCodec
from .config import DEFAULT_DIRECTION_CONFIG, DirectionConfig
from .errors import RecommendationNotFoundError
from .models import PharmacyDirection, RecommendationRecord
from .ranker import DistanceRanker
from .repository import RecommendationRepository

logger = logging.getLogger(__name__)


class RecommendationService:
    """
    Address in, nearest pharmacies out.

    Pipeline: geocode -> rank -> persist -> build links. A failed geocode
    yields an empty result; only the direction lookup raises, and it does so
    with distinguishable errors (bad token vs. unknown id).
    """

    def __init__(
        self,
        geocoder: GeocodeClient,
        pharmacy_search: PharmacySearchService,
        repository: RecommendationRepository,
        ranker: DistanceRanker | None = None,
        codec: ShortLinkCodec | None = None,
        category_search: CategorySearchClient | None = None,
        config: DirectionConfig = DEFAULT_DIRECTION_CONFIG,
    ) -> None:
        self._geocoder = geocoder
        self._pharmacy_search = pharmacy_search
        self._repository = repository
        self._ranker = ranker or DistanceRanker()
        self._codec = codec or ShortLinkCodec()
        self._category_search = category_search
        self._config = config

    def recommend(self, address: str) -> list[RecommendationRecord]:
        origin = self._geocoder.resolve(address)
        if origin is None:
            logger.error("Address search failed or found nothing for %r", address)
            return []

        if self._config.use_category_search and self._category_search is not None:
            places = self._category_search.search(origin.location, self._config.radius_km)
            ranked = self._ranker.adapt_ranked(origin, places, limit=self._config.max_results)
        else:
            ranked = self._ranker.rank(
                origin,
                self._pharmacy_search.search(),
                radius_km=self._config.radius_km,
                limit=self._config.max_results,
            )
        logger.info("Found %d pharmacies near %s", len(ranked), origin.address_name)

        if not ranked:
            return []
        return self._repository.save_all(ranked)

    def recommend_directions(self, address: str) -> list[PharmacyDirection]:
        return [self.to_direction(record) for record in self.recommend(address)]

    def to_direction(self, record: RecommendationRecord) -> PharmacyDirection:
        location = record.target_location
        return PharmacyDirection(
            pharmacyName=record.target_name,
            pharmacyAddress=record.target_address,
            directionUrl=self._config.base_url + self._codec.encode(record.id),
            roadViewUrl=f"{self._config.road_view_base_url}{location.latitude},{location.longitude}",
            distance=f"{record.distance_km:.2f} km",
        )

    def lookup(self, token: str) -> str:
        """Map URL for a direction token. Raises on a bad token or an unknown id."""
        recommendation_id = self._codec.decode(token)
        record = self._repository.find_by_id(recommendation_id)
        if record is None:
            raise RecommendationNotFoundError(recommendation_id)

        location = record.target_location
        params = ",".join([record.target_name, str(location.latitude), str(location.longitude)])
        return self._config.map_base_url + params
