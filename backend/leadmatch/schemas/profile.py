"""Candidate profiles, discrepancies and the qualified profile.

A candidate profile is a plain dict keyed by field name. Fields an extractor
could not determine are left out entirely so that "absent" never looks like a
disagreement during cross-validation.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

CandidateProfile = dict[str, Any]

NUMERIC_FIELDS: tuple[str, ...] = ("budget", "bedrooms", "bathrooms")
CATEGORICAL_FIELDS: tuple[str, ...] = ("city", "area", "property_type")


class PropertyType(str, Enum):
    DEPARTAMENTO = "departamento"
    CASA = "casa"
    TERRENO = "terreno"


class ModelExtractionResult(BaseModel):
    """Payload returned by a model adapter. Unknown keys are ignored."""

    model_config = ConfigDict(str_strip_whitespace=True)

    budget: int | None = Field(default=None, gt=0)
    bedrooms: int | None = Field(default=None, gt=0)
    bathrooms: int | None = Field(default=None, gt=0)
    city: str | None = None
    area: str | None = None
    property_type: str | None = None
    phone: str | None = None
    confidence: Literal["high", "medium", "low"] | None = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_is_missing(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def numbers_not_booleans(cls, v: Any) -> Any:
        if isinstance(v, bool):
            msg = f"expected a number, got {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("phone", mode="before")
    @classmethod
    def phone_as_text(cls, v: Any) -> Any:
        # Models often emit phone numbers as bare integers
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("confidence", mode="before")
    @classmethod
    def confidence_lowercase(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


def normalize_profile(raw: dict[str, Any] | None) -> CandidateProfile:
    """Validate a raw model-extraction payload into a candidate profile.

    Unknown keys and null or blank values are dropped and numeric strings are
    cast to ``int``. ``confidence`` defaults to ``"medium"`` for a non-empty
    payload that does not state one. Raises ``pydantic.ValidationError`` for
    values of the wrong type, non-positive numbers and unknown confidence
    levels.
    """
    if not raw:
        return {}

    profile: CandidateProfile = ModelExtractionResult.model_validate(raw).model_dump(
        exclude_none=True
    )
    if profile and "confidence" not in profile:
        profile["confidence"] = "medium"
    return profile


class Discrepancy(BaseModel):
    """A field both extractors asserted with different values."""

    model_config = ConfigDict(frozen=True)

    field: str
    llm_value: Any
    heuristic_value: Any
    diff_pct: float | None = None
    severity: Literal["high", "medium"]


class QualifiedProfile(BaseModel):
    """Outcome of one qualification run."""

    model_config = ConfigDict(frozen=True)

    lead_profile: CandidateProfile
    discrepancies: list[Discrepancy] = Field(default_factory=list)
    needs_review: bool = False
    duration_ms: int = Field(gt=0)
    status: Literal["qualified"] = "qualified"
    turns_count: int = Field(default=0, ge=0)
