from __future__ import annotations

import logging
from typing import Any

import anthropic

from leadmatch.config import settings
from leadmatch.llm.base import LLMProvider, parse_json_response
from leadmatch.llm.prompts.extraction import (
    EXTRACTION_SYSTEM_PROMPT,
    build_extraction_user_prompt,
)
from leadmatch.schemas.conversation import ConversationTurn
from leadmatch.utils.exceptions import LLMConfigurationError

logger = logging.getLogger(__name__)


class ClaudeProvider(LLMProvider):
    def __init__(self) -> None:
        self.client: anthropic.AsyncAnthropic | None = None
        if settings.anthropic_api_key:
            self.client = anthropic.AsyncAnthropic(
                api_key=settings.anthropic_api_key,
                timeout=settings.llm_timeout_seconds,
            )
        self._model = settings.anthropic_model

    @property
    def provider_name(self) -> str:
        return "claude"

    @property
    def model_name(self) -> str:
        return self._model

    async def extract_profile(self, turns: list[ConversationTurn]) -> dict[str, Any]:
        if self.client is None:
            raise LLMConfigurationError("ANTHROPIC_API_KEY is not set")

        logger.info("Sending %d turns to Anthropic (%s)", len(turns), self._model)
        response = await self.client.messages.create(
            model=self._model,
            max_tokens=1024,
            temperature=settings.llm_temperature,
            system=EXTRACTION_SYSTEM_PROMPT,
            messages=[
                {"role": "user", "content": build_extraction_user_prompt(turns)},
            ],
        )
        if not response.content:
            return {}
        return parse_json_response(response.content[0].text)
