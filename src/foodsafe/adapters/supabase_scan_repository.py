"""Supabase repository for scan history."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from foodsafe.domain.assessments import AssessmentResult
from foodsafe.domain.labels import LabelExtraction
from foodsafe.domain.models import ScanRecord
from foodsafe.services.scans import ScanRepository

_COLUMNS = "id, user_id, product_name, label, result, image_url, created_at"


@dataclass
class SupabaseScanRepository(ScanRepository):
    """Supabase implementation for scans, scoped by owner on every query."""

    client: Client

    def create_scan(self, scan: ScanRecord) -> None:
        """Insert a scan row."""
        response = (
            self.client.table("food_scans")
            .insert(
                {
                    "id": str(scan.id),
                    "user_id": str(scan.user_id),
                    "product_name": scan.product_name,
                    "label": scan.label.model_dump(mode="json"),
                    "result": scan.result.model_dump(mode="json", by_alias=True),
                    "image_url": scan.image_url,
                    "created_at": scan.created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create scan in Supabase")

    def list_scans(self, user_id: UUID, limit: int | None) -> list[ScanRecord]:
        """Return a user's scans, newest first."""
        query = (
            self.client.table("food_scans")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
        )
        if limit is not None:
            query = query.limit(limit)
        response = query.execute()
        return [_parse_scan(row) for row in response.data or []]

    def get_scan(self, user_id: UUID, scan_id: UUID) -> ScanRecord | None:
        """Return a scan owned by the user."""
        response = (
            self.client.table("food_scans")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("id", str(scan_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_scan(response.data[0])

    def delete_scan(self, user_id: UUID, scan_id: UUID) -> bool:
        """Delete a scan owned by the user."""
        response = (
            self.client.table("food_scans")
            .delete()
            .eq("user_id", str(user_id))
            .eq("id", str(scan_id))
            .execute()
        )
        return bool(response.data)


def _parse_scan(row: dict[str, object]) -> ScanRecord:
    return ScanRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        product_name=str(row.get("product_name", "")),
        label=LabelExtraction.model_validate(row["label"]),
        result=AssessmentResult.model_validate(row["result"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        image_url=row.get("image_url"),
    )
