from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, model_validator

from leadmatch.schemas.match import MatchResult


class TurnIn(BaseModel):
    role: str
    text: str
    position: int | None = None


class RunRequest(BaseModel):
    scenario: str | None = None
    turns: list[TurnIn] = []

    @model_validator(mode="after")
    def scenario_or_turns(self) -> RunRequest:
        if not self.scenario and not self.turns:
            raise ValueError("Provide either a scenario name or conversation turns")
        return self


class RunMetrics(BaseModel):
    qualification_duration_ms: int
    turns_count: int


class RunResponse(BaseModel):
    lead_profile: dict[str, Any]
    matches: list[MatchResult]
    needs_review: bool
    discrepancies: list[dict[str, Any]]
    metrics: RunMetrics
    status: Literal["qualified"]
