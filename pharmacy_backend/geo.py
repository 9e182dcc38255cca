from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """A WGS84 point in degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class ResolvedAddress(BaseModel):
    """Canonical address and location returned by geocoding."""

    model_config = ConfigDict(frozen=True)

    address_name: str
    location: Coordinate
