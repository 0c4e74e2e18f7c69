"""Shared test fixtures."""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

import pytest

from foodsafe.config import Settings
from foodsafe.containers import AppContainer
from foodsafe.domain.errors import AuthenticationError
from foodsafe.domain.models import CallerIdentity, ScanRecord
from foodsafe.domain.profiles import HealthProfile
from foodsafe.services.assessments import AssessmentService
from foodsafe.services.extraction import LabelExtractionService
from foodsafe.services.identity import IdentityService, IdentityVerifier
from foodsafe.services.inference import InferenceClient, InferenceGateway
from foodsafe.services.profiles import ProfileRepository, ProfileService
from foodsafe.services.scans import ScanRepository, ScanService

SAFE_REPLY: dict[str, object] = {
    "product_summary": "A ready meal of chicken, rice and vegetables.",
    "nutritional_analysis": "A balanced 300 kcal meal.",
    "assessment": "Safe to Eat",
    "explanation": "No health conditions are declared and sugar is low.",
}

LABEL_REPLY: dict[str, object] = {
    "product_name": "Oat Cookies",
    "ingredients": ["Oats", "Sugar", "Butter"],
    "label_text": "Oat Cookies. Ingredients: Oats, Sugar, Butter",
    "serving_size_g": 30,
    "calories": 140,
    "fat_g": 6,
    "sugar_g": 9,
    "sodium_mg": 85,
}


@dataclass
class FakeInferenceClient(InferenceClient):
    """Fake inference client that replays scripted replies in order."""

    replies: list[object] = field(default_factory=lambda: [SAFE_REPLY])
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema_name: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> object:
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "schema_name": schema_name,
                "image_data_url": image_data_url,
            }
        )
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        return reply


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, HealthProfile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> HealthProfile | None:
        return self.profiles.get(user_id)

    def upsert_profile(self, user_id: UUID, profile: HealthProfile) -> None:
        self.profiles[user_id] = profile


@dataclass
class InMemoryScanRepository(ScanRepository):
    """In-memory scan repository for tests."""

    scans: dict[UUID, ScanRecord] = field(default_factory=dict)

    def create_scan(self, scan: ScanRecord) -> None:
        self.scans[scan.id] = scan

    def list_scans(self, user_id: UUID, limit: int | None) -> list[ScanRecord]:
        owned = sorted(
            (scan for scan in self.scans.values() if scan.user_id == user_id),
            key=lambda scan: scan.created_at,
            reverse=True,
        )
        return owned if limit is None else owned[:limit]

    def get_scan(self, user_id: UUID, scan_id: UUID) -> ScanRecord | None:
        scan = self.scans.get(scan_id)
        if scan is None or scan.user_id != user_id:
            return None
        return scan

    def delete_scan(self, user_id: UUID, scan_id: UUID) -> bool:
        if self.get_scan(user_id, scan_id) is None:
            return False
        del self.scans[scan_id]
        return True


@dataclass
class FakeIdentityVerifier(IdentityVerifier):
    """Identity verifier that accepts a fixed set of tokens."""

    tokens: dict[str, CallerIdentity] = field(default_factory=dict)

    def verify(self, access_token: str) -> CallerIdentity:
        identity = self.tokens.get(access_token)
        if identity is None:
            raise AuthenticationError("Invalid access token")
        return identity


def make_gateway(client: InferenceClient, **overrides: object) -> InferenceGateway:
    options: dict[str, object] = {
        "model": "gpt-5.2",
        "reasoning_effort": "medium",
        "store": False,
    }
    options.update(overrides)
    return InferenceGateway(client=client, **options)


def make_request(
    conditions: list[str] | None = None,
    weight_goal: str = "maintain weight",
    **label: object,
) -> dict[str, object]:
    label_payload: dict[str, object] = {
        "product_name": "Chicken Rice Bowl",
        "ingredients": "Chicken, Rice, Vegetables",
        "calories": 300,
        "fat_g": 10,
        "sugar_g": 5,
        "sodium_mg": 150,
    }
    label_payload.update(label)
    return {
        "profile": {"conditions": conditions or [], "weight_goal": weight_goal},
        "label": label_payload,
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openai_api_key="openai-key",
    )


@pytest.fixture
def identity() -> CallerIdentity:
    return CallerIdentity(user_id=uuid4(), email="user@example.com")


@pytest.fixture
def inference_client() -> FakeInferenceClient:
    return FakeInferenceClient()


@pytest.fixture
def profile_repository(identity: CallerIdentity) -> InMemoryProfileRepository:
    repository = InMemoryProfileRepository()
    repository.profiles[identity.user_id] = HealthProfile(
        conditions=["diabetes"], weight_goal="lose weight"
    )
    return repository


@pytest.fixture
def scan_repository() -> InMemoryScanRepository:
    return InMemoryScanRepository()


@pytest.fixture
def container(
    settings: Settings,
    identity: CallerIdentity,
    inference_client: FakeInferenceClient,
    profile_repository: InMemoryProfileRepository,
    scan_repository: InMemoryScanRepository,
) -> AppContainer:
    gateway = make_gateway(inference_client)
    profile_service = ProfileService(profile_repository)
    assessment_service = AssessmentService(gateway)
    scan_service = ScanService(
        profile_service=profile_service,
        assessment_service=assessment_service,
        repository=scan_repository,
    )
    identity_service = IdentityService(
        FakeIdentityVerifier(tokens={"user-token": identity})
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        identity_service=identity_service,
        profile_service=profile_service,
        assessment_service=assessment_service,
        extraction_service=LabelExtractionService(gateway),
        scan_service=scan_service,
        close_resources=close_resources,
    )
