from __future__ import annotations

from pydantic import BaseModel


class CatalogEntry(BaseModel):
    id: int
    title: str = ""
    price: float | None
    city: str
    area: str | None = None
    bedrooms: int | None = None
    bathrooms: int | None = None
    property_type: str | None = None
    is_active: bool = True

    model_config = {"from_attributes": True, "frozen": True}
