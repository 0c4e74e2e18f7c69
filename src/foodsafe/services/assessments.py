"""Food safety assessment service."""

from dataclasses import dataclass

from foodsafe.domain.assessments import AssessmentResult
from foodsafe.services.inference import InferenceGateway
from foodsafe.services.prompts import render_assessment_prompt
from foodsafe.services.schemas import ASSESSMENT_OUTPUT, validate_input


@dataclass
class AssessmentService:
    """Runs the validate, render, invoke pipeline for one request."""

    gateway: InferenceGateway

    async def assess(self, raw: object) -> AssessmentResult:
        """Return the model verdict for a profile and label pair."""
        request = validate_input(raw)
        prompt = render_assessment_prompt(request)
        return await self.gateway.invoke(prompt, ASSESSMENT_OUTPUT)
