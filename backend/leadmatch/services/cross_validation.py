"""Cross-validation and merging of the two candidate profiles.

The model profile and the heuristic profile are compared field by field. A
field only one side asserted is not a disagreement. On a conflict the
heuristic value is kept, since it cannot be talked into a different answer.
"""

from __future__ import annotations

import logging

from leadmatch.schemas.profile import (
    CATEGORICAL_FIELDS,
    NUMERIC_FIELDS,
    CandidateProfile,
    Discrepancy,
)

logger = logging.getLogger(__name__)

# Above this a numeric disagreement is "high" severity
HIGH_SEVERITY_DIFF_PCT = 30.0
# Above this a numeric disagreement forces human review, even at "medium".
# Kept separate from HIGH_SEVERITY_DIFF_PCT on purpose.
REVIEW_DIFF_PCT = 20.0


def _diff_pct(a: float, b: float) -> float:
    return round(abs(a - b) / max(a, b) * 100, 1)


def compare_profiles(
    llm_profile: CandidateProfile, heuristic_profile: CandidateProfile
) -> list[Discrepancy]:
    discrepancies: list[Discrepancy] = []

    for field in NUMERIC_FIELDS:
        llm_value = llm_profile.get(field)
        heuristic_value = heuristic_profile.get(field)
        if llm_value is None or heuristic_value is None:
            continue
        if llm_value == heuristic_value:
            continue

        diff_pct = _diff_pct(llm_value, heuristic_value)
        discrepancies.append(
            Discrepancy(
                field=field,
                llm_value=llm_value,
                heuristic_value=heuristic_value,
                diff_pct=diff_pct,
                severity="high" if diff_pct > HIGH_SEVERITY_DIFF_PCT else "medium",
            )
        )

    for field in CATEGORICAL_FIELDS:
        llm_value = llm_profile.get(field)
        heuristic_value = heuristic_profile.get(field)
        if llm_value is None or heuristic_value is None:
            continue
        if str(llm_value).lower() == str(heuristic_value).lower():
            continue

        discrepancies.append(
            Discrepancy(
                field=field,
                llm_value=llm_value,
                heuristic_value=heuristic_value,
                severity="medium",
            )
        )

    if discrepancies:
        logger.info(
            "Cross-validation found %d discrepancies: %s",
            len(discrepancies),
            [d.field for d in discrepancies],
        )
    return discrepancies


def merge_profiles(
    llm_profile: CandidateProfile,
    heuristic_profile: CandidateProfile,
    discrepancies: list[Discrepancy],
) -> CandidateProfile:
    """Heuristic fields first; model fields fill only the gaps that are not in conflict."""
    conflicting_fields = {d.field for d in discrepancies}
    merged = dict(heuristic_profile)

    for field, value in llm_profile.items():
        if field in merged or field in conflicting_fields:
            continue
        merged[field] = value

    return merged


def requires_review(discrepancies: list[Discrepancy]) -> bool:
    return any(
        d.severity == "high" or (d.diff_pct is not None and d.diff_pct > REVIEW_DIFF_PCT)
        for d in discrepancies
    )
