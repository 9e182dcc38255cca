from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..geo import Coordinate, ResolvedAddress


class KakaoDocument(BaseModel):
    """One hit from the address search endpoint. ``x``/``y`` are lon/lat."""

    model_config = ConfigDict(populate_by_name=True)

    address_name: str
    longitude: float = Field(..., alias="x", ge=-180, le=180)
    latitude: float = Field(..., alias="y", ge=-90, le=90)

    def to_resolved(self) -> ResolvedAddress:
        return ResolvedAddress(
            address_name=self.address_name,
            location=Coordinate(latitude=self.latitude, longitude=self.longitude),
        )


class KakaoPlace(BaseModel):
    """One hit from the category search endpoint, distance in meters."""

    model_config = ConfigDict(populate_by_name=True)

    place_name: str
    address_name: str
    longitude: float = Field(..., alias="x", ge=-180, le=180)
    latitude: float = Field(..., alias="y", ge=-90, le=90)
    distance: float = 0.0

    @field_validator("distance", mode="before")
    @classmethod
    def _blank_distance(cls, value):
        # Kakao sends "" when the request carried no reference point.
        return value or 0.0

    @property
    def location(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class KakaoMeta(BaseModel):
    total_count: int = 0


class KakaoAddressResponse(BaseModel):
    documents: list[KakaoDocument] = Field(default_factory=list)
    meta: KakaoMeta = Field(default_factory=KakaoMeta)


class KakaoCategoryResponse(BaseModel):
    documents: list[KakaoPlace] = Field(default_factory=list)
    meta: KakaoMeta = Field(default_factory=KakaoMeta)
