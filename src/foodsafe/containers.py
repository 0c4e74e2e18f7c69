"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from foodsafe.adapters.openai_inference_client import OpenAIInferenceClient
from foodsafe.adapters.supabase_identity_verifier import SupabaseIdentityVerifier
from foodsafe.adapters.supabase_profile_repository import SupabaseProfileRepository
from foodsafe.adapters.supabase_scan_repository import SupabaseScanRepository
from foodsafe.config import Settings
from foodsafe.services.assessments import AssessmentService
from foodsafe.services.extraction import LabelExtractionService
from foodsafe.services.identity import IdentityService
from foodsafe.services.inference import InferenceGateway
from foodsafe.services.profiles import ProfileService
from foodsafe.services.scans import ScanService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identity_service: IdentityService
    profile_service: ProfileService
    assessment_service: AssessmentService
    extraction_service: LabelExtractionService
    scan_service: ScanService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    openai_client = OpenAIInferenceClient.create(
        resolved_settings.openai_api_key,
        timeout_seconds=resolved_settings.inference_timeout_seconds,
    )
    gateway = InferenceGateway(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        timeout_seconds=resolved_settings.inference_timeout_seconds,
        max_attempts=resolved_settings.inference_max_attempts,
    )
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    assessment_service = AssessmentService(gateway)
    scan_service = ScanService(
        profile_service=profile_service,
        assessment_service=assessment_service,
        repository=SupabaseScanRepository(supabase_client),
        retry_invalid_output=resolved_settings.retry_invalid_model_output,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        identity_service=IdentityService(SupabaseIdentityVerifier(supabase_client)),
        profile_service=profile_service,
        assessment_service=assessment_service,
        extraction_service=LabelExtractionService(gateway),
        scan_service=scan_service,
        close_resources=close_resources,
    )
