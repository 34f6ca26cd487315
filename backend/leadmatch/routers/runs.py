from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from leadmatch.database import get_db
from leadmatch.llm.base import LLMProvider
from leadmatch.llm.factory import get_llm_provider
from leadmatch.llm.fake_provider import ScenarioProvider
from leadmatch.schemas.conversation import build_turns
from leadmatch.schemas.run import RunMetrics, RunRequest, RunResponse
from leadmatch.services.catalog_service import SqlPropertyCatalog
from leadmatch.services.matching_service import match_properties
from leadmatch.services.qualification_service import qualify_lead
from leadmatch.utils.exceptions import ScenarioNotFoundError

router = APIRouter()


@router.post("/run", response_model=RunResponse)
async def run(
    request: RunRequest,
    db: Session = Depends(get_db),
    llm: LLMProvider = Depends(get_llm_provider),
) -> RunResponse:
    """Qualify a conversation and match it against the catalog.

    A named scenario replays its recorded conversation with the recorded model
    output; otherwise the posted turns go to the configured provider.
    """
    if request.scenario:
        try:
            scenario = ScenarioProvider(request.scenario)
        except ScenarioNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        turns = scenario.turns
        llm = scenario
    else:
        try:
            turns = build_turns([t.model_dump() for t in request.turns])
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e

    qualified = await qualify_lead(turns, llm)

    matches = match_properties(qualified.lead_profile, SqlPropertyCatalog(db))

    return RunResponse(
        lead_profile=qualified.lead_profile,
        matches=matches,
        needs_review=qualified.needs_review,
        discrepancies=[d.model_dump(exclude_none=True) for d in qualified.discrepancies],
        metrics=RunMetrics(
            qualification_duration_ms=qualified.duration_ms,
            turns_count=qualified.turns_count,
        ),
        status=qualified.status,
    )
