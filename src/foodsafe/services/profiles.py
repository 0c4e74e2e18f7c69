"""Health profile business logic."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from foodsafe.domain.errors import ProfileNotFound
from foodsafe.domain.models import CallerIdentity
from foodsafe.domain.profiles import HealthProfile
from foodsafe.services.schemas import validate_profile


class ProfileRepository(Protocol):
    """Persistence interface for health profiles."""

    def get_profile(self, user_id: UUID) -> HealthProfile | None:
        """Return the stored profile for a user, if present."""

    def upsert_profile(self, user_id: UUID, profile: HealthProfile) -> None:
        """Create or replace the profile for a user."""


@dataclass
class ProfileService:
    """Application service for reading and updating profiles."""

    repository: ProfileRepository

    def get_profile(self, identity: CallerIdentity) -> HealthProfile:
        """Return the caller's profile."""
        profile = self.repository.get_profile(identity.user_id)
        if profile is None:
            raise ProfileNotFound("Complete your health profile first")
        return profile

    def update_profile(self, identity: CallerIdentity, raw: object) -> HealthProfile:
        """Validate and store the caller's profile."""
        profile = validate_profile(raw)
        self.repository.upsert_profile(identity.user_id, profile)
        return profile
