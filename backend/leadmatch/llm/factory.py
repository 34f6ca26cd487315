from __future__ import annotations

from leadmatch.config import settings
from leadmatch.llm.base import LLMProvider

_provider_instance: LLMProvider | None = None


def get_llm_provider() -> LLMProvider:
    global _provider_instance
    if _provider_instance is None:
        if settings.llm_provider == "claude":
            from leadmatch.llm.claude_provider import ClaudeProvider

            _provider_instance = ClaudeProvider()
        elif settings.llm_provider == "openai":
            from leadmatch.llm.openai_provider import OpenAIProvider

            _provider_instance = OpenAIProvider()
        elif settings.llm_provider == "fake":
            from leadmatch.llm.fake_provider import ScenarioProvider

            _provider_instance = ScenarioProvider(settings.fake_scenario)
        else:
            raise ValueError(f"Unknown LLM provider: {settings.llm_provider}")
    return _provider_instance


def reset_llm_provider() -> None:
    """Drop the cached provider so the next call re-reads settings."""
    global _provider_instance
    _provider_instance = None
