from __future__ import annotations

import copy
from typing import Any

from leadmatch.llm.base import LLMProvider
from leadmatch.llm.scenarios import SCENARIOS
from leadmatch.schemas.conversation import ConversationTurn, build_turns
from leadmatch.utils.exceptions import ScenarioNotFoundError


class ScenarioProvider(LLMProvider):
    """Returns the recorded model output of one named scenario.

    The scenario is fixed at construction and the conversation passed to
    ``extract_profile`` is ignored.
    """

    def __init__(self, scenario: str) -> None:
        if scenario not in SCENARIOS:
            valid = ", ".join(sorted(SCENARIOS))
            raise ScenarioNotFoundError(f"Unknown scenario '{scenario}'. Available: {valid}")
        self.scenario = scenario

    @property
    def provider_name(self) -> str:
        return "fake"

    @property
    def model_name(self) -> str:
        return f"scenario:{self.scenario}"

    @property
    def turns(self) -> list[ConversationTurn]:
        return build_turns(SCENARIOS[self.scenario]["messages"])

    async def extract_profile(self, turns: list[ConversationTurn]) -> dict[str, Any]:
        return copy.deepcopy(SCENARIOS[self.scenario]["llm_response"])
