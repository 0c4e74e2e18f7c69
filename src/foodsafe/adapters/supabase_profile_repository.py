"""Supabase-backed health profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from foodsafe.domain.profiles import HealthProfile
from foodsafe.services.profiles import ProfileRepository
from foodsafe.services.schemas import validate_profile


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for health profile persistence."""

    client: Client

    def get_profile(self, user_id: UUID) -> HealthProfile | None:
        """Return the profile row for a user, if present."""
        response = (
            self.client.table("health_profiles")
            .select(
                "name, conditions, detailed_health_conditions, weight_goal, "
                "gender, current_weight_kg"
            )
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return validate_profile(dict(row, conditions=row.get("conditions") or []))

    def upsert_profile(self, user_id: UUID, profile: HealthProfile) -> None:
        """Create or replace the profile row for a user."""
        payload = profile.model_dump(mode="json")
        payload["user_id"] = str(user_id)
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        self.client.table("health_profiles").upsert(
            payload, on_conflict="user_id"
        ).execute()
