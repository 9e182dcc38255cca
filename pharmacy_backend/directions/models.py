from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..geo import Coordinate


class RecommendationRecord(BaseModel):
    """One recommended pharmacy for one search. ``id`` is set on persistence."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    input_address: str
    input_location: Coordinate
    target_name: str
    target_address: str
    target_location: Coordinate
    distance_km: float = Field(..., ge=0.0)
    created_at: datetime | None = None


class DirectionSearchRequest(BaseModel):
    address: str = Field(..., min_length=1, description="Free-form address to search around")

    @field_validator("address")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("address must not be blank")
        return value


class PharmacyDirection(BaseModel):
    pharmacyName: str
    pharmacyAddress: str
    directionUrl: str
    roadViewUrl: str
    distance: str
