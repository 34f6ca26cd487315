"""Pattern-based lead profile extraction.

This is the predictable half of dual extraction. It only reads what the buyer
wrote (user turns), never the agent's questions, and is deliberately
conservative: a value is either inside a plausible range or discarded.

Budget uses "last valid mention wins". A buyer who says "my budget is 5
millions but really I only have 3" ends up with 3,000,000 here, while a
context-aware model tends to keep the first figure. The disagreement is
surfaced by cross-validation instead of being smoothed over.
"""

from __future__ import annotations

import logging
import re
import unicodedata

from leadmatch.schemas.conversation import ConversationTurn, ordered_turns
from leadmatch.schemas.profile import CandidateProfile, PropertyType

logger = logging.getLogger(__name__)

# Values up to this are read as "N millions"
MILLIONS_MAX = 100
# Full amounts accepted as-is; anything larger (e.g. a 10-digit phone) is noise
BUDGET_MIN = 500_000
BUDGET_MAX = 50_000_000

ROOM_COUNT_MIN = 1
ROOM_COUNT_MAX = 10

# ── Patterns (matched against accent-folded text) ─────────────────────────

_BUDGET_KEYWORDS = (
    r"\b(?:presupuesto|budget|hasta|up\s+to|maximo|maximum|tengo|i\s+have|solo|only)"
)
_CONNECTORS = r"(?:\s*(?:(?:de|es|is|of)\b|:)){0,2}\s*"
_MILLIONS_UNIT = r"\s*(?:millones|millon|millions?|mdp|m)\b"

_BEDROOM_WORDS = r"(?:recamaras?|rec|habitaciones?|cuartos?|bedrooms?|beds?)"
_BATHROOM_WORDS = r"(?:banos?|bathrooms?|baths?)"
# Counted things that follow "tengo 2" / "only have 2" and are not money
_NOT_MONEY_WORDS = (
    r"(?:" + _BEDROOM_WORDS + r"|" + _BATHROOM_WORDS
    + r"|hijos?|ninos?|kids?|children|anos?|years?|autos?|cars?|perros?|dogs?)"
)

_BUDGET_PATTERNS: list[re.Pattern[str]] = [
    # "presupuesto 3 millones", "up to 4 million"
    re.compile(_BUDGET_KEYWORDS + _CONNECTORS + r"\$?\s*(\d+)" + _MILLIONS_UNIT, re.IGNORECASE),
    # "budget $3,500,000", "hasta 2.800.000", "presupuesto 800,000"
    re.compile(
        _BUDGET_KEYWORDS + _CONNECTORS + r"\$?\s*(\d{1,3}(?:[,.]?\d{3}){1,2})(?!\d)",
        re.IGNORECASE,
    ),
    # "solo tengo 3" (bare number, read as millions)
    re.compile(
        r"\b(?:tengo|solo|have|only)" + _CONNECTORS
        + r"(\d+)(?!\d|[,.]\d|\s*" + _NOT_MONEY_WORDS + r"\b)",
        re.IGNORECASE,
    ),
]

# (name as written, canonical name); first listed match wins
_CITIES: list[tuple[str, str]] = [
    ("CDMX", "CDMX"),
    ("Ciudad de México", "CDMX"),
    ("Mexico City", "CDMX"),
    ("Guadalajara", "Guadalajara"),
    ("Monterrey", "Monterrey"),
    ("Querétaro", "Querétaro"),
    ("Puebla", "Puebla"),
]

_AREAS: list[str] = [
    # CDMX
    "Roma Norte",
    "Roma Sur",
    "Condesa",
    "Polanco",
    "Del Valle",
    "Coyoacán",
    "Santa Fe",
    "Narvarte",
    "Juárez",
    "Doctores",
    # Guadalajara
    "Providencia",
    "Chapalita",
    "Zapopan",
    "Tlaquepaque",
    # Monterrey
    "San Pedro",
    "Cumbres",
    "Valle Oriente",
]

_PROPERTY_TYPE_KEYWORDS: list[tuple[PropertyType, re.Pattern[str]]] = [
    (
        PropertyType.DEPARTAMENTO,
        re.compile(r"\b(?:depas?|departamentos?|apartments?|apt)\b", re.IGNORECASE),
    ),
    (PropertyType.CASA, re.compile(r"\b(?:casas?|houses?)\b", re.IGNORECASE)),
    (PropertyType.TERRENO, re.compile(r"\b(?:terrenos?|land|lotes?|lot)\b", re.IGNORECASE)),
]


def _fold(text: str) -> str:
    """Strip accents so "Coyoacan" and "Coyoacán" match the same pattern."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _whole_word(name: str) -> re.Pattern[str]:
    return re.compile(r"\b" + re.escape(_fold(name)) + r"\b", re.IGNORECASE)


_CITY_PATTERNS = [(_whole_word(name), canonical) for name, canonical in _CITIES]
_AREA_PATTERNS = [(_whole_word(area), area) for area in _AREAS]


def _room_patterns(words: str) -> tuple[re.Pattern[str], re.Pattern[str]]:
    return (
        re.compile(r"\b(\d+)\s*" + words + r"\b", re.IGNORECASE),
        re.compile(r"\b" + words + r"\s*:?\s*(\d+)", re.IGNORECASE),
    )


_BEDROOM_PATTERNS = _room_patterns(_BEDROOM_WORDS)
_BATHROOM_PATTERNS = _room_patterns(_BATHROOM_WORDS)
# A number right after a room word with no count of its own ("bedrooms 2")
# belongs to that word
_AFTER_ROOM_WORD = re.compile(
    r"(?:^|[^\d\s])\s*\b(?:" + _BEDROOM_WORDS + r"|" + _BATHROOM_WORDS + r")\s*:?\s*$",
    re.IGNORECASE,
)


# ── Field extractors ──────────────────────────────────────────────────────


def _normalize_budget(raw: str) -> int | None:
    number = int(re.sub(r"[,.]", "", raw))
    if 1 <= number <= MILLIONS_MAX:
        return number * 1_000_000
    if BUDGET_MIN <= number <= BUDGET_MAX:
        return number
    return None


def extract_budget(text: str) -> int | None:
    """Return the last plausible budget mentioned in ``text``.

    Every pattern is scanned with ``finditer``; valid candidates are ordered by
    where their number sits in the text and the last one is kept.
    """
    folded = _fold(text)
    candidates: list[tuple[int, int, int]] = []
    for pattern_index, pattern in enumerate(_BUDGET_PATTERNS):
        for match in pattern.finditer(folded):
            value = _normalize_budget(match.group(1))
            if value is not None:
                candidates.append((match.start(1), pattern_index, value))

    if not candidates:
        return None
    candidates.sort()
    return candidates[-1][2]


def extract_city(text: str) -> str | None:
    folded = _fold(text)
    for pattern, canonical in _CITY_PATTERNS:
        if pattern.search(folded):
            return canonical
    return None


def extract_area(text: str) -> str | None:
    folded = _fold(text)
    for pattern, area in _AREA_PATTERNS:
        if pattern.search(folded):
            return area
    return None


def _extract_room_count(
    text: str, patterns: tuple[re.Pattern[str], re.Pattern[str]]
) -> int | None:
    folded = _fold(text)
    number_first, word_first = patterns
    own_number = next(
        (
            m
            for m in number_first.finditer(folded)
            if not _AFTER_ROOM_WORD.search(folded[: m.start(1)])
        ),
        None,
    )
    for match in (own_number, word_first.search(folded)):
        if match:
            count = int(match.group(1))
            if ROOM_COUNT_MIN <= count <= ROOM_COUNT_MAX:
                return count
    return None


def extract_bedrooms(text: str) -> int | None:
    return _extract_room_count(text, _BEDROOM_PATTERNS)


def extract_bathrooms(text: str) -> int | None:
    return _extract_room_count(text, _BATHROOM_PATTERNS)


def extract_property_type(text: str) -> str | None:
    folded = _fold(text)
    for property_type, pattern in _PROPERTY_TYPE_KEYWORDS:
        if pattern.search(folded):
            return property_type.value
    return None


# ── Public API ────────────────────────────────────────────────────────────


def user_text(turns: list[ConversationTurn]) -> str:
    """Join the buyer's own messages in conversation order."""
    return " ".join(t.text for t in ordered_turns(turns) if t.role == "user")


def extract_heuristic_profile(turns: list[ConversationTurn]) -> CandidateProfile:
    text = user_text(turns)

    profile = {
        "budget": extract_budget(text),
        "city": extract_city(text),
        "area": extract_area(text),
        "bedrooms": extract_bedrooms(text),
        "bathrooms": extract_bathrooms(text),
        "property_type": extract_property_type(text),
    }
    profile = {field: value for field, value in profile.items() if value is not None}

    logger.info("Heuristic extraction: %s", profile)
    return profile
