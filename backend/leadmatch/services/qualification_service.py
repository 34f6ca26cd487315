"""Lead qualification: dual extraction with cross-validation.

1. Model extraction: context-aware, reads the whole conversation, may fail.
2. Heuristic extraction: pattern-based, reads only the buyer's messages.
3. Cross-validation: every field both sides asserted differently is recorded.
4. Merge: the heuristic value wins on conflicts.

A model failure degrades to a heuristic-only result; it never fails the run.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from leadmatch.schemas.conversation import ConversationTurn, ordered_turns
from leadmatch.schemas.profile import CandidateProfile, QualifiedProfile, normalize_profile
from leadmatch.services.cross_validation import (
    compare_profiles,
    merge_profiles,
    requires_review,
)
from leadmatch.services.heuristic_extractor import extract_heuristic_profile

if TYPE_CHECKING:
    from leadmatch.llm.base import LLMProvider

logger = logging.getLogger(__name__)


async def _extract_from_llm(
    turns: list[ConversationTurn], llm: LLMProvider | None
) -> CandidateProfile:
    if llm is None:
        return {}

    try:
        raw_result = await llm.extract_profile(turns)
        profile = normalize_profile(raw_result)
    except Exception:
        logger.exception("LLM extraction failed (%s); continuing heuristic-only", llm.provider_name)
        return {}

    logger.info("LLM extraction (%s/%s): %s", llm.provider_name, llm.model_name, profile)
    return profile


async def qualify_lead(
    turns: list[ConversationTurn], llm: LLMProvider | None = None
) -> QualifiedProfile:
    """Qualify a buyer from their conversation.

    ``llm`` is the model extraction adapter; ``None`` runs heuristic-only.
    """
    start_time = time.perf_counter()
    turns = ordered_turns(turns)

    llm_profile = await _extract_from_llm(turns, llm)
    heuristic_profile = extract_heuristic_profile(turns)

    discrepancies = compare_profiles(llm_profile, heuristic_profile)
    final_profile = merge_profiles(llm_profile, heuristic_profile, discrepancies)

    # Downstream storage rejects a zero duration
    duration_ms = max(int((time.perf_counter() - start_time) * 1000), 1)

    result = QualifiedProfile(
        lead_profile=final_profile,
        discrepancies=discrepancies,
        needs_review=requires_review(discrepancies),
        duration_ms=duration_ms,
        status="qualified",
        turns_count=len(turns),
    )

    logger.info(
        "lead_qualified profile=%s discrepancies=%d needs_review=%s duration_ms=%d",
        result.lead_profile,
        len(result.discrepancies),
        result.needs_review,
        result.duration_ms,
    )
    return result
