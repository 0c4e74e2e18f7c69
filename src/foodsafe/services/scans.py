"""Scan analysis and history service."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from foodsafe.domain.assessments import AssessmentRequest, AssessmentResult, Verdict
from foodsafe.domain.errors import InvalidModelOutput, ScanNotFound
from foodsafe.domain.models import CallerIdentity, HistorySummary, ScanRecord
from foodsafe.services.assessments import AssessmentService
from foodsafe.services.profiles import ProfileService
from foodsafe.services.schemas import validate_label

logger = logging.getLogger(__name__)


class ScanRepository(Protocol):
    """Owner-scoped persistence interface for scan history."""

    def create_scan(self, scan: ScanRecord) -> None:
        """Persist a new scan."""

    def list_scans(self, user_id: UUID, limit: int | None) -> list[ScanRecord]:
        """Return a user's scans, newest first."""

    def get_scan(self, user_id: UUID, scan_id: UUID) -> ScanRecord | None:
        """Return a scan owned by the user, if present."""

    def delete_scan(self, user_id: UUID, scan_id: UUID) -> bool:
        """Delete a scan owned by the user and report whether it existed."""


@dataclass
class ScanService:
    """Assesses labels for a caller and keeps their scan history."""

    profile_service: ProfileService
    assessment_service: AssessmentService
    repository: ScanRepository
    retry_invalid_output: bool = True

    async def analyze_and_save(
        self,
        identity: CallerIdentity,
        raw_label: object,
        image_url: str | None = None,
    ) -> ScanRecord:
        """Assess a label against the caller's profile and store the result."""
        label = validate_label(raw_label)
        profile = self.profile_service.get_profile(identity)
        request = AssessmentRequest(profile=profile, label=label)
        result = await self._assess(request)
        scan = ScanRecord(
            id=uuid4(),
            user_id=identity.user_id,
            product_name=label.product_name,
            label=label,
            result=result,
            created_at=datetime.now(tz=UTC),
            image_url=image_url,
        )
        self.repository.create_scan(scan)
        logger.info(
            "Saved scan %s for user %s: %s",
            scan.id,
            identity.user_id,
            result.verdict.value,
        )
        return scan

    def list_history(
        self, identity: CallerIdentity, limit: int | None = 20
    ) -> list[ScanRecord]:
        """Return the caller's scans, newest first."""
        return self.repository.list_scans(identity.user_id, limit)

    def get_scan(self, identity: CallerIdentity, scan_id: UUID) -> ScanRecord:
        """Return one of the caller's scans."""
        scan = self.repository.get_scan(identity.user_id, scan_id)
        if scan is None:
            raise ScanNotFound(f"Scan {scan_id} not found")
        return scan

    def delete_scan(self, identity: CallerIdentity, scan_id: UUID) -> None:
        """Delete one of the caller's scans."""
        if not self.repository.delete_scan(identity.user_id, scan_id):
            raise ScanNotFound(f"Scan {scan_id} not found")
        logger.info("Deleted scan %s for user %s", scan_id, identity.user_id)

    def summarize(self, identity: CallerIdentity, recent: int = 5) -> HistorySummary:
        """Return verdict counts and the latest scans for the dashboard."""
        scans = self.repository.list_scans(identity.user_id, None)
        counts = {verdict: 0 for verdict in Verdict}
        for scan in scans:
            counts[scan.result.verdict] += 1
        return HistorySummary(total=len(scans), counts=counts, recent=scans[:recent])

    async def _assess(self, request: AssessmentRequest) -> AssessmentResult:
        try:
            return await self.assessment_service.assess(request)
        except InvalidModelOutput:
            if not self.retry_invalid_output:
                raise
            logger.warning("Retrying assessment once after an invalid model reply")
            return await self.assessment_service.assess(request)
