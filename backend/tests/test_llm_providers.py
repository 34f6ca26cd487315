"""Tests for the model extraction adapters and payload normalization.

The real SDK clients are replaced with mocks; nothing here hits a network.
"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError
from conftest import make_turns

from leadmatch.config import settings
from leadmatch.llm import factory
from leadmatch.llm.base import parse_json_response
from leadmatch.llm.claude_provider import ClaudeProvider
from leadmatch.llm.fake_provider import ScenarioProvider
from leadmatch.llm.openai_provider import OpenAIProvider
from leadmatch.llm.prompts.extraction import build_extraction_user_prompt, format_transcript
from leadmatch.schemas.profile import normalize_profile
from leadmatch.utils.exceptions import LLMConfigurationError, ScenarioNotFoundError

TURNS = make_turns(
    ("user", "Busco casa en Monterrey"),
    ("agent", "¿Cuál es tu presupuesto?"),
    ("user", "presupuesto 3 millones"),
)


# ── parse_json_response ───────────────────────────────────────────────────


class TestParseJsonResponse:
    def test_plain_json(self):
        assert parse_json_response('{"budget": 3000000}') == {"budget": 3000000}

    def test_markdown_fenced(self):
        raw = '```json\n{"city": "CDMX"}\n```'
        assert parse_json_response(raw) == {"city": "CDMX"}

    def test_prose_around_object(self):
        raw = 'Here is the profile:\n{"bedrooms": 2}\nLet me know.'
        assert parse_json_response(raw) == {"bedrooms": 2}

    def test_no_object_raises(self):
        with pytest.raises(ValueError):
            parse_json_response("no json here")

    def test_non_object_raises(self):
        with pytest.raises(ValueError):
            parse_json_response("[1, 2]")


# ── normalize_profile ─────────────────────────────────────────────────────


class TestNormalizeProfile:
    def test_empty(self):
        assert normalize_profile({}) == {}
        assert normalize_profile(None) == {}

    def test_casts_and_drops(self):
        raw = {
            "budget": "3000000",
            "bedrooms": 2.0,
            "city": " CDMX ",
            "area": None,
            "bathrooms": "",
            "notes": "ignored",
            "phone": 5512345678,
        }
        assert normalize_profile(raw) == {
            "budget": 3_000_000,
            "bedrooms": 2,
            "city": "CDMX",
            "phone": "5512345678",
            "confidence": "medium",
        }

    def test_keeps_stated_confidence(self):
        assert normalize_profile({"city": "CDMX", "confidence": "HIGH"})["confidence"] == "high"

    def test_uncastable_number_raises(self):
        with pytest.raises(ValidationError):
            normalize_profile({"budget": "tres millones"})

    @pytest.mark.parametrize(
        "raw",
        [
            {"bedrooms": True},
            {"budget": False, "city": "CDMX"},
            {"city": ["CDMX"]},
            {"area": {"name": "Roma Norte"}},
            {"budget": 0, "city": "CDMX"},
            {"bathrooms": -2},
            {"bedrooms": 2.5},
            {"city": "CDMX", "confidence": "certain"},
        ],
    )
    def test_wrongly_typed_values_raise(self, raw):
        with pytest.raises(ValidationError):
            normalize_profile(raw)

    def test_non_object_payload_raises(self):
        with pytest.raises(ValidationError):
            normalize_profile(["CDMX"])


# ── Prompt building ───────────────────────────────────────────────────────


def test_transcript_labels_both_roles_in_order():
    transcript = format_transcript(list(reversed(TURNS)))
    assert transcript.splitlines() == [
        "Buyer: Busco casa en Monterrey",
        "Agent: ¿Cuál es tu presupuesto?",
        "Buyer: presupuesto 3 millones",
    ]
    assert transcript in build_extraction_user_prompt(TURNS)


# ── Providers ─────────────────────────────────────────────────────────────


class TestScenarioProvider:
    @pytest.mark.asyncio
    async def test_returns_recorded_response(self):
        provider = ScenarioProvider("budget_mismatch")
        result = await provider.extract_profile(TURNS)
        assert result["budget"] == 5_000_000
        assert provider.provider_name == "fake"
        assert provider.model_name == "scenario:budget_mismatch"

    @pytest.mark.asyncio
    async def test_response_is_a_copy(self):
        provider = ScenarioProvider("budget_seeker")
        first = await provider.extract_profile(TURNS)
        first["budget"] = 1
        second = await provider.extract_profile(TURNS)
        assert second["budget"] == 3_000_000

    def test_turns(self):
        turns = ScenarioProvider("phone_vs_budget").turns
        assert [t.role for t in turns] == ["user", "agent", "user"]
        assert [t.position for t in turns] == [0, 1, 2]

    def test_unknown_scenario(self):
        with pytest.raises(ScenarioNotFoundError):
            ScenarioProvider("nope")


class TestClaudeProvider:
    @pytest.mark.asyncio
    async def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr(settings, "anthropic_api_key", "")
        provider = ClaudeProvider()
        with pytest.raises(LLMConfigurationError):
            await provider.extract_profile(TURNS)

    @pytest.mark.asyncio
    async def test_parses_response(self, monkeypatch):
        monkeypatch.setattr(settings, "anthropic_api_key", "test-key")
        provider = ClaudeProvider()
        response = SimpleNamespace(
            content=[SimpleNamespace(text='```json\n{"budget": 3000000, "city": "Monterrey"}\n```')]
        )
        provider.client = MagicMock()
        provider.client.messages.create = AsyncMock(return_value=response)

        result = await provider.extract_profile(TURNS)

        assert result == {"budget": 3000000, "city": "Monterrey"}
        kwargs = provider.client.messages.create.await_args.kwargs
        assert kwargs["model"] == settings.anthropic_model
        assert "Buyer: presupuesto 3 millones" in kwargs["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_empty_content(self, monkeypatch):
        monkeypatch.setattr(settings, "anthropic_api_key", "test-key")
        provider = ClaudeProvider()
        provider.client = MagicMock()
        provider.client.messages.create = AsyncMock(return_value=SimpleNamespace(content=[]))
        assert await provider.extract_profile(TURNS) == {}


class TestOpenAIProvider:
    @pytest.mark.asyncio
    async def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr(settings, "openai_api_key", "")
        with pytest.raises(LLMConfigurationError):
            await OpenAIProvider().extract_profile(TURNS)

    @pytest.mark.asyncio
    async def test_parses_response(self, monkeypatch):
        monkeypatch.setattr(settings, "openai_api_key", "test-key")
        provider = OpenAIProvider()
        message = SimpleNamespace(content='{"bedrooms": 3}')
        response = SimpleNamespace(choices=[SimpleNamespace(message=message)])
        provider.client = MagicMock()
        provider.client.chat.completions.create = AsyncMock(return_value=response)

        assert await provider.extract_profile(TURNS) == {"bedrooms": 3}
        kwargs = provider.client.chat.completions.create.await_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}


class TestFactory:
    @pytest.fixture(autouse=True)
    def _reset(self):
        factory.reset_llm_provider()
        yield
        factory.reset_llm_provider()

    def test_fake_provider(self, monkeypatch):
        monkeypatch.setattr(settings, "llm_provider", "fake")
        monkeypatch.setattr(settings, "fake_scenario", "phone_vs_budget")
        provider = factory.get_llm_provider()
        assert isinstance(provider, ScenarioProvider)
        assert provider.scenario == "phone_vs_budget"

    def test_instance_is_cached(self, monkeypatch):
        monkeypatch.setattr(settings, "llm_provider", "claude")
        assert factory.get_llm_provider() is factory.get_llm_provider()

    def test_unknown_provider(self, monkeypatch):
        monkeypatch.setattr(settings, "llm_provider", "llama")
        with pytest.raises(ValueError):
            factory.get_llm_provider()
