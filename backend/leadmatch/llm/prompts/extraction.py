from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from leadmatch.schemas.conversation import ConversationTurn

EXTRACTION_SYSTEM_PROMPT = """You are a lead qualification assistant for a real estate platform in Mexico.

Your job is to read a conversation between a sales agent and a prospective buyer and extract the buyer's requirements.

You must output ONLY a valid JSON object. Omit any field that was not mentioned:

{
  "budget": "Budget in MXN (integer, e.g. 3000000)",
  "city": "City name (string, use CDMX for Ciudad de México)",
  "area": "Neighborhood name (string)",
  "bedrooms": "Number of bedrooms (integer)",
  "bathrooms": "Number of bathrooms (integer)",
  "property_type": "One of: casa, departamento, terreno",
  "phone": "Buyer phone number if provided (string)",
  "confidence": "Your confidence in the extraction: high, medium or low"
}

EXTRACTION RULES:
1. Only extract what the buyer states; the agent's questions are context, not data.
2. Never confuse a phone number with a budget.
3. "3 millones" means 3000000.
4. Return ONLY the JSON object. No markdown, no explanation, no wrapping."""

_SPEAKER_LABELS = {"user": "Buyer", "agent": "Agent"}


def format_transcript(turns: list[ConversationTurn]) -> str:
    ordered = sorted(turns, key=lambda t: t.position)
    return "\n".join(f"{_SPEAKER_LABELS.get(t.role, t.role)}: {t.text}" for t in ordered)


def build_extraction_user_prompt(turns: list[ConversationTurn]) -> str:
    return f"""Extract the buyer profile from the following conversation.

CONVERSATION:
---
{format_transcript(turns)}
---

Return ONLY the JSON object."""
