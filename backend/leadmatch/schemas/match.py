from __future__ import annotations

from pydantic import BaseModel, Field


class MatchResult(BaseModel):
    property_id: int
    score: int = Field(ge=0, le=100)
    score_components: dict[str, int]
    reasons: list[str]
    title: str = ""
    price: float | None = None
    city: str = ""
    area: str | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    property_type: str | None = None
