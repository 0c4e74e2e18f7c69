"""Models for the assessment request and the model verdict."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from foodsafe.domain.labels import LabelExtraction
from foodsafe.domain.profiles import HealthProfile


class Verdict(str, Enum):
    """Three-way safety verdict."""

    SAFE = "Safe to Eat"
    MODERATION = "Consume in Moderation"
    NOT_SAFE = "Not Safe"


class AssessmentRequest(BaseModel):
    """Validated unit handed to the prompt renderer."""

    model_config = ConfigDict(frozen=True)

    profile: HealthProfile
    label: LabelExtraction


class AssessmentResult(BaseModel):
    """Structured reply of the assessment model."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    verdict: Verdict = Field(alias="assessment")
    explanation: str = Field(min_length=1)
    product_summary: str | None = None
    nutritional_analysis: str | None = None
