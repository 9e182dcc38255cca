from __future__ import annotations

import numpy as np

from ..geo import ResolvedAddress
from ..kakao.models import KakaoPlace
from ..pharmacy.models import PharmacyRecord
from .models import RecommendationRecord

EARTH_RADIUS_KM = 6371.0
DEFAULT_RADIUS_KM = 10.0
DEFAULT_LIMIT = 3


def distance_km(lat1, lon1, lat2, lon2):
    """
    Great-circle distance in kilometres (spherical law of cosines).

    Accepts scalars or numpy arrays. The cosine term is clamped to [-1, 1]
    because rounding can push it just past 1.0 for identical points, where
    ``arccos`` would return NaN.
    """
    lat1, lon1, lat2, lon2 = (np.radians(np.asarray(v, dtype=float)) for v in (lat1, lon1, lat2, lon2))
    cosine = np.sin(lat1) * np.sin(lat2) + np.cos(lat1) * np.cos(lat2) * np.cos(lon1 - lon2)
    # sin^2 + cos^2 can also land just under 1.0; identical points are exactly 0.
    same_point = (lat1 == lat2) & (lon1 == lon2)
    cosine = np.where(same_point, 1.0, cosine)
    result = EARTH_RADIUS_KM * np.arccos(np.clip(cosine, -1.0, 1.0))
    if np.ndim(result) == 0:
        return float(result)
    return result


class DistanceRanker:
    def rank(
        self,
        origin: ResolvedAddress | None,
        candidates: list[PharmacyRecord],
        radius_km: float = DEFAULT_RADIUS_KM,
        limit: int = DEFAULT_LIMIT,
    ) -> list[RecommendationRecord]:
        """Nearest candidates within ``radius_km`` (inclusive), at most ``limit``."""
        if origin is None or not candidates or limit <= 0:
            return []

        lats = np.array([c.location.latitude for c in candidates], dtype=float)
        lons = np.array([c.location.longitude for c in candidates], dtype=float)
        distances = distance_km(origin.location.latitude, origin.location.longitude, lats, lons)

        within = np.flatnonzero(distances <= radius_km)
        # Stable sort keeps input order among equal distances.
        ordered = within[np.argsort(distances[within], kind="stable")][:limit]

        return [
            RecommendationRecord(
                input_address=origin.address_name,
                input_location=origin.location,
                target_name=candidates[i].name,
                target_address=candidates[i].address,
                target_location=candidates[i].location,
                distance_km=float(distances[i]),
            )
            for i in ordered
        ]

    def adapt_ranked(
        self,
        origin: ResolvedAddress | None,
        places: list[KakaoPlace],
        limit: int = DEFAULT_LIMIT,
    ) -> list[RecommendationRecord]:
        """
        Wrap category-search results that Kakao already sorted by distance.

        Provider order is kept as is; only meters become kilometres.
        """
        if origin is None or limit <= 0:
            return []
        return [
            RecommendationRecord(
                input_address=origin.address_name,
                input_location=origin.location,
                target_name=place.place_name,
                target_address=place.address_name,
                target_location=place.location,
                distance_km=place.distance / 1000,
            )
            for place in places[:limit]
        ]
