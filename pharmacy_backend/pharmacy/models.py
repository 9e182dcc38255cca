from __future__ import annotations

from pydantic import BaseModel, Field

from ..geo import Coordinate


class PharmacyRecord(BaseModel):
    id: int = Field(..., ge=0)
    name: str
    address: str
    location: Coordinate
