"""Health profile models used to personalize assessments."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HealthCondition(str, Enum):
    """Condition tags a user can declare."""

    DIABETES = "diabetes"
    HIGH_BP = "high BP"
    ALLERGIES = "allergies"
    CELIAC_DISEASE = "celiac disease"
    LACTOSE_INTOLERANCE = "lactose intolerance"


class WeightGoal(str, Enum):
    """Weight goal selected in the profile."""

    LOSE = "lose weight"
    MAINTAIN = "maintain weight"
    GAIN = "gain weight"


class HealthProfile(BaseModel):
    """Fields of the user profile relevant to an assessment."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str | None = None
    conditions: list[HealthCondition] = Field(default_factory=list)
    detailed_health_conditions: str | None = None
    weight_goal: WeightGoal
    gender: str | None = None
    current_weight_kg: float | None = Field(default=None, ge=0)

    @field_validator("conditions")
    @classmethod
    def _dedupe_conditions(
        cls, value: list[HealthCondition]
    ) -> list[HealthCondition]:
        return list(dict.fromkeys(value))

    @field_validator("name", "detailed_health_conditions", "gender")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        return value or None
