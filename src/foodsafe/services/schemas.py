"""Validation at both ends of the inference boundary."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from foodsafe.domain.assessments import AssessmentRequest, AssessmentResult, Verdict
from foodsafe.domain.errors import FieldError, InvalidModelOutput, ValidationError
from foodsafe.domain.labels import LabelExtraction
from foodsafe.domain.profiles import HealthProfile

ResultT = TypeVar("ResultT")
ModelT = TypeVar("ModelT", bound=BaseModel)

_NULLABLE_STRING: dict[str, object] = {"anyOf": [{"type": "string"}, {"type": "null"}]}

ASSESSMENT_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "product_summary": _NULLABLE_STRING,
        "nutritional_analysis": _NULLABLE_STRING,
        "assessment": {
            "type": "string",
            "enum": [verdict.value for verdict in Verdict],
        },
        "explanation": {"type": "string"},
    },
    "required": [
        "product_summary",
        "nutritional_analysis",
        "assessment",
        "explanation",
    ],
    "additionalProperties": False,
}

EXTRACTION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "product_name": {"type": "string"},
        "ingredients": {"type": "array", "items": {"type": "string"}},
        "label_text": _NULLABLE_STRING,
        "serving_size_g": {
            "anyOf": [{"type": "number", "minimum": 0}, {"type": "null"}]
        },
        "calories": {"type": "number", "minimum": 0},
        "fat_g": {"type": "number", "minimum": 0},
        "sugar_g": {"type": "number", "minimum": 0},
        "sodium_mg": {"type": "number", "minimum": 0},
    },
    "required": [
        "product_name",
        "ingredients",
        "label_text",
        "serving_size_g",
        "calories",
        "fat_g",
        "sugar_g",
        "sodium_mg",
    ],
    "additionalProperties": False,
}


@dataclass(frozen=True)
class OutputSchema(Generic[ResultT]):
    """Structured output contract for one kind of model call."""

    name: str
    json_schema: dict[str, object]
    validate: Callable[[object], ResultT]


def validate_input(raw: object) -> AssessmentRequest:
    """Validate a profile and label pair before it is rendered."""
    if isinstance(raw, AssessmentRequest):
        return raw
    return _validate(AssessmentRequest, raw, ValidationError)


def validate_profile(raw: object) -> HealthProfile:
    """Validate a health profile payload."""
    return _validate(HealthProfile, raw, ValidationError)


def validate_label(raw: object) -> LabelExtraction:
    """Validate a manually entered or extracted label payload."""
    return _validate(LabelExtraction, raw, ValidationError)


def validate_output(raw: object) -> AssessmentResult:
    """Validate the assessment model reply."""
    return _validate(AssessmentResult, raw, InvalidModelOutput)


def validate_extraction(raw: object) -> LabelExtraction:
    """Validate the label extraction model reply."""
    return _validate(LabelExtraction, raw, InvalidModelOutput)


ASSESSMENT_OUTPUT: OutputSchema[AssessmentResult] = OutputSchema(
    name="food_safety_assessment",
    json_schema=ASSESSMENT_SCHEMA,
    validate=validate_output,
)

EXTRACTION_OUTPUT: OutputSchema[LabelExtraction] = OutputSchema(
    name="food_label_extraction",
    json_schema=EXTRACTION_SCHEMA,
    validate=validate_extraction,
)


def _validate(
    model: type[ModelT], raw: object, error_type: type[ValidationError]
) -> ModelT:
    try:
        return model.model_validate(raw)
    except PydanticValidationError as exc:
        raise error_type(_field_errors(exc)) from exc


def _field_errors(exc: PydanticValidationError) -> list[FieldError]:
    errors = []
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"]) or "<root>"
        errors.append(FieldError(path=path, message=error["msg"]))
    return errors
