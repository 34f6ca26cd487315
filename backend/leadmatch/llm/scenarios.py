"""Canned conversations with the model output recorded for each.

Used by ``ScenarioProvider`` for demos and tests. ``heuristic_response`` is
what the pattern extractor is expected to produce for the same messages.
"""

from __future__ import annotations

from typing import Any

SCENARIOS: dict[str, dict[str, Any]] = {
    # Clear budget, city and preferences
    "budget_seeker": {
        "messages": [
            {"role": "user", "text": "Busco un departamento en CDMX"},
            {"role": "agent", "text": "¿En qué zona te gustaría?"},
            {"role": "user", "text": "Roma Norte, 2 recámaras"},
            {"role": "agent", "text": "¿Cuál es tu presupuesto?"},
            {"role": "user", "text": "Hasta 3 millones"},
        ],
        "llm_response": {
            "budget": 3_000_000,
            "city": "CDMX",
            "area": "Roma Norte",
            "bedrooms": 2,
            "confidence": "high",
        },
        "heuristic_response": {
            "budget": 3_000_000,
            "city": "CDMX",
            "area": "Roma Norte",
            "bedrooms": 2,
            "property_type": "departamento",
        },
    },
    # Buyer states a higher figure first and corrects it; the model keeps the first
    "budget_mismatch": {
        "messages": [
            {"role": "user", "text": "Busco depa en Guadalajara"},
            {"role": "agent", "text": "¿Cuál es tu presupuesto?"},
            {"role": "user", "text": "Mi presupuesto es 5 millones pero realmente solo tengo 3"},
        ],
        "llm_response": {
            "budget": 5_000_000,
            "city": "Guadalajara",
            "property_type": "departamento",
            "confidence": "medium",
        },
        "heuristic_response": {
            "budget": 3_000_000,
            "city": "Guadalajara",
            "property_type": "departamento",
        },
    },
    # A phone number next to the budget must not be read as the budget
    "phone_vs_budget": {
        "messages": [
            {"role": "user", "text": "Busco casa en Monterrey"},
            {"role": "agent", "text": "Cuéntame más sobre lo que buscas"},
            {"role": "user", "text": "presupuesto 3 millones, mi tel es 5512345678"},
        ],
        "llm_response": {
            "budget": 3_000_000,
            "city": "Monterrey",
            "phone": "5512345678",
            "property_type": "casa",
            "confidence": "high",
        },
        "heuristic_response": {
            "budget": 3_000_000,
            "city": "Monterrey",
            "property_type": "casa",
        },
    },
}


def available_scenarios() -> list[str]:
    return sorted(SCENARIOS)
