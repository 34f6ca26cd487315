from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConversationTurn(BaseModel):
    """One message of a buyer conversation, ordered by ``position``."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "agent"]
    text: str
    position: int = Field(ge=0)

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value: Any) -> Any:
        # Chat APIs call the agent side "assistant"
        if isinstance(value, str) and value.lower() == "assistant":
            return "agent"
        return value.lower() if isinstance(value, str) else value


def ordered_turns(turns: list[ConversationTurn]) -> list[ConversationTurn]:
    return sorted(turns, key=lambda t: t.position)


def build_turns(messages: list[dict[str, Any]]) -> list[ConversationTurn]:
    """Build turns from ``{role, text|content, position?}`` dicts.

    A missing position defaults to the message's index in the list.
    """
    turns = []
    for index, message in enumerate(messages):
        position = message.get("position")
        turns.append(
            ConversationTurn(
                role=message["role"],
                text=message.get("text", message.get("content", "")),
                position=index if position is None else position,
            )
        )
    return turns
