"""Property catalog backed by the ``properties`` table, plus the demo seed."""

from __future__ import annotations

import logging
import random
from typing import Protocol

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from leadmatch.models.property import Property
from leadmatch.schemas.catalog import CatalogEntry

logger = logging.getLogger(__name__)


class PropertyCatalog(Protocol):
    def active_in_city(self, city: str) -> list[CatalogEntry]: ...


class SqlPropertyCatalog:
    def __init__(self, db: Session) -> None:
        self.db = db

    def active_in_city(self, city: str) -> list[CatalogEntry]:
        rows = self.db.scalars(
            select(Property)
            .where(Property.is_active.is_(True))
            .where(func.lower(Property.city) == city.strip().lower())
            .order_by(Property.id)
        ).all()
        return [CatalogEntry.model_validate(row) for row in rows]


# ── Demo catalog ──────────────────────────────────────────────────────────

# (city, areas, (min_price, max_price))
_SEED_CITIES: list[tuple[str, list[str], tuple[int, int]]] = [
    (
        "CDMX",
        ["Roma Norte", "Condesa", "Polanco", "Del Valle", "Coyoacán", "Santa Fe"],
        (2_000_000, 8_000_000),
    ),
    ("Guadalajara", ["Providencia", "Chapalita", "Zapopan", "Tlaquepaque"], (1_500_000, 6_000_000)),
    ("Monterrey", ["San Pedro", "Cumbres", "Valle Oriente"], (2_500_000, 9_000_000)),
]


def seed_catalog(db: Session, seed: int = 42) -> int:
    """Insert two listings (departamento and casa) per demo neighbourhood.

    No-op when the table already has rows. Returns the number inserted.
    """
    existing = db.scalar(select(func.count()).select_from(Property))
    if existing:
        logger.info("Catalog already has %d properties; skipping seed", existing)
        return 0

    rng = random.Random(seed)
    created = 0
    for city, areas, (min_price, max_price) in _SEED_CITIES:
        for area in areas:
            for property_type, label in (("departamento", "Departamento"), ("casa", "Casa")):
                db.add(
                    Property(
                        title=f"{label} en {area}",
                        description=f"Propiedad en {area}, {city}.",
                        price=float(rng.randrange(min_price, max_price, 50_000)),
                        city=city,
                        area=area,
                        bedrooms=rng.randint(2, 4),
                        bathrooms=rng.randint(2, 3),
                        square_meters=rng.randint(80, 220),
                        property_type=property_type,
                        is_active=True,
                    )
                )
                created += 1

    db.commit()
    logger.info("Seeded catalog with %d properties", created)
    return created
