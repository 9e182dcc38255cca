from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import RedirectResponse

from .directions.errors import InvalidShortTokenError, RecommendationNotFoundError
from .directions.models import DirectionSearchRequest, PharmacyDirection
from .directions.repository import InMemoryRecommendationRepository
from .directions.service import RecommendationService
from .kakao.address_search import GeocodeClient
from .kakao.category_search import CategorySearchClient
from .logging_config import configure_logging
from .pharmacy.cache import PharmacyCache
from .pharmacy.config import DEFAULT_CACHE_CONFIG
from .pharmacy.data_store import PharmacyRepository, load_pharmacies_csv
from .pharmacy.kv_store import build_key_value_store
from .pharmacy.search import PharmacySearchService

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Pharmacy Recommendation API", version="1.0.0")


# ── Wiring ───────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_pharmacy_search() -> PharmacySearchService:
    repository = PharmacyRepository(load_pharmacies_csv(DEFAULT_CACHE_CONFIG.data_csv))
    cache = PharmacyCache(build_key_value_store(DEFAULT_CACHE_CONFIG))
    return PharmacySearchService(cache, repository)


@lru_cache(maxsize=1)
def get_recommendation_service() -> RecommendationService:
    return RecommendationService(
        geocoder=GeocodeClient(),
        pharmacy_search=get_pharmacy_search(),
        repository=InMemoryRecommendationRepository(),
        category_search=CategorySearchClient(),
    )


def _lookup_or_raise(service: RecommendationService, token: str) -> str:
    try:
        return service.lookup(token)
    except InvalidShortTokenError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except RecommendationNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/direction/search", response_model=list[PharmacyDirection])
def search_pharmacy(
    body: DirectionSearchRequest,
    service: RecommendationService = Depends(get_recommendation_service),
) -> list[PharmacyDirection]:
    logger.info("Direction search for %r", body.address)
    return service.recommend_directions(body.address)


@app.get("/api/direction/{token}")
def direction_url(
    token: str,
    service: RecommendationService = Depends(get_recommendation_service),
) -> str:
    return _lookup_or_raise(service, token)


@app.get("/dir/{token}")
def redirect_direction(
    token: str,
    service: RecommendationService = Depends(get_recommendation_service),
) -> RedirectResponse:
    return RedirectResponse(_lookup_or_raise(service, token), status_code=302)


# ── Cache endpoints ──────────────────────────────────────────────────────


@app.post("/api/pharmacy/cache")
def warm_pharmacy_cache(
    pharmacy_search: PharmacySearchService = Depends(get_pharmacy_search),
) -> dict[str, int]:
    return {"saved": pharmacy_search.warm_cache()}


@app.get("/cache/stats")
def cache_stats(
    pharmacy_search: PharmacySearchService = Depends(get_pharmacy_search),
) -> dict:
    return pharmacy_search.stats()
