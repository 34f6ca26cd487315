from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from leadmatch.schemas.conversation import ConversationTurn


class LLMProvider(ABC):
    """Model extraction adapter.

    ``extract_profile`` receives the whole conversation (both roles) and
    returns a raw profile dict. It may raise; callers own the fallback.
    """

    @abstractmethod
    async def extract_profile(self, turns: list[ConversationTurn]) -> dict[str, Any]: ...

    @property
    @abstractmethod
    def provider_name(self) -> str: ...

    @property
    @abstractmethod
    def model_name(self) -> str: ...


def parse_json_response(text: str) -> dict[str, Any]:
    """Parse a JSON object from model output, tolerating markdown fences
    and prose around the object."""
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        text = text.rsplit("```", 1)[0]
    text = text.strip()
    if not text.startswith("{"):
        start, end = text.find("{"), text.rfind("}")
        if start == -1 or end <= start:
            raise ValueError(f"No JSON object in model response: {text[:200]!r}")
        text = text[start : end + 1]
    parsed = json.loads(text)
    if not isinstance(parsed, dict):
        raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed
