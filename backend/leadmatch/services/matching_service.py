"""Scoring-based property matching.

Each catalog entry in the lead's city is scored on a 100-point scale:

- budget         40 pts  (price within 10/20/30% of budget → 40/30/20)
- bedrooms       30 pts  (exact → 30, off by one → 20)
- area           20 pts  (exact → 20, substring either way → 10)
- property type  10 pts  (exact → 10)

A dimension is only scored when the lead profile has that field, so a sparse
profile cannot reach 100. Reasons are read off the component scores.
"""

from __future__ import annotations

import logging
from typing import Any

from leadmatch.schemas.catalog import CatalogEntry
from leadmatch.schemas.match import MatchResult
from leadmatch.services.catalog_service import PropertyCatalog

logger = logging.getLogger(__name__)

MAX_RESULTS = 3

# (max_diff_pct, points), checked in order
_BUDGET_TIERS: list[tuple[float, int]] = [(10, 40), (20, 30), (30, 20)]


def score_budget(price: float | None, budget: float | None) -> int:
    if price is None or not budget:
        return 0
    # diff_pct <= max_diff, without float division at the tier boundaries
    diff = abs(price - budget) * 100
    for max_diff, points in _BUDGET_TIERS:
        if diff <= max_diff * budget:
            return points
    return 0


def score_bedrooms(property_beds: int | None, requested_beds: int | None) -> int:
    if property_beds is None or requested_beds is None:
        return 0
    if property_beds == requested_beds:
        return 30
    if abs(property_beds - requested_beds) == 1:
        return 20
    return 0


def score_area(property_area: str | None, requested_area: str | None) -> int:
    if not property_area or not requested_area:
        return 0
    prop_area = property_area.strip().lower()
    req_area = requested_area.strip().lower()
    if prop_area == req_area:
        return 20
    # e.g. "Roma" vs "Roma Norte"
    if prop_area in req_area or req_area in prop_area:
        return 10
    return 0


def score_property_type(property_type: str | None, requested_type: str | None) -> int:
    if not property_type or not requested_type:
        return 0
    return 10 if property_type.strip().lower() == requested_type.strip().lower() else 0


def calculate_score(entry: CatalogEntry, profile: dict[str, Any]) -> dict[str, int]:
    """Component scores for the profile fields that are present."""
    components: dict[str, int] = {}
    if profile.get("budget"):
        components["budget"] = score_budget(entry.price, profile["budget"])
    if profile.get("bedrooms") is not None:
        components["bedrooms"] = score_bedrooms(entry.bedrooms, profile["bedrooms"])
    if profile.get("area"):
        components["area"] = score_area(entry.area, profile["area"])
    if profile.get("property_type"):
        components["property_type"] = score_property_type(
            entry.property_type, profile["property_type"]
        )
    return components


def generate_reasons(components: dict[str, int]) -> list[str]:
    reasons: list[str] = []
    budget = components.get("budget")
    if budget == 40:
        reasons.append("budget_exact_match")
    elif budget is not None and 20 <= budget <= 39:
        reasons.append("budget_close_match")

    if components.get("bedrooms") == 30:
        reasons.append("bedrooms_exact_match")
    elif components.get("bedrooms") == 20:
        reasons.append("bedrooms_close_match")

    if components.get("area") == 20:
        reasons.append("area_exact_match")
    elif components.get("area") == 10:
        reasons.append("area_partial_match")

    if components.get("property_type") == 10:
        reasons.append("property_type_match")
    return reasons


def _to_match(entry: CatalogEntry, components: dict[str, int]) -> MatchResult:
    return MatchResult(
        property_id=entry.id,
        score=sum(components.values()),
        score_components=components,
        reasons=generate_reasons(components),
        title=entry.title,
        price=entry.price,
        city=entry.city,
        area=entry.area,
        bedrooms=entry.bedrooms,
        bathrooms=entry.bathrooms,
        property_type=entry.property_type,
    )


def match_properties(profile: dict[str, Any], catalog: PropertyCatalog) -> list[MatchResult]:
    """Return up to ``MAX_RESULTS`` best-scoring active listings in the lead's city.

    Without a city there is no search at all; an empty list is returned.
    Equal scores are ordered by catalog id, lowest first.
    """
    city = str(profile.get("city") or "").strip()
    if not city:
        logger.warning("No property matches: missing_city")
        return []

    city_key = city.lower()
    candidates = [
        entry
        for entry in catalog.active_in_city(city)
        if entry.is_active and entry.city.strip().lower() == city_key
    ]

    scored = [_to_match(entry, calculate_score(entry, profile)) for entry in candidates]
    scored.sort(key=lambda m: (-m.score, m.property_id))
    top_matches = scored[:MAX_RESULTS]

    logger.info(
        "Scored %d properties in %s; returning %d (top score %s)",
        len(scored),
        city,
        len(top_matches),
        top_matches[0].score if top_matches else None,
    )
    return top_matches
