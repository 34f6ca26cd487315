from __future__ import annotations

import logging
from typing import Any

from openai import AsyncOpenAI

from leadmatch.config import settings
from leadmatch.llm.base import LLMProvider, parse_json_response
from leadmatch.llm.prompts.extraction import (
    EXTRACTION_SYSTEM_PROMPT,
    build_extraction_user_prompt,
)
from leadmatch.schemas.conversation import ConversationTurn
from leadmatch.utils.exceptions import LLMConfigurationError

logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    def __init__(self) -> None:
        self.client: AsyncOpenAI | None = None
        if settings.openai_api_key:
            self.client = AsyncOpenAI(
                api_key=settings.openai_api_key,
                timeout=settings.llm_timeout_seconds,
            )
        self._model = settings.openai_model

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def model_name(self) -> str:
        return self._model

    async def extract_profile(self, turns: list[ConversationTurn]) -> dict[str, Any]:
        if self.client is None:
            raise LLMConfigurationError("OPENAI_API_KEY is not set")

        logger.info("Sending %d turns to OpenAI (%s)", len(turns), self._model)
        response = await self.client.chat.completions.create(
            model=self._model,
            temperature=settings.llm_temperature,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
                {"role": "user", "content": build_extraction_user_prompt(turns)},
            ],
        )
        return parse_json_response(response.choices[0].message.content or "{}")
