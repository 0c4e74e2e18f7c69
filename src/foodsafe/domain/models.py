"""Domain records for callers and scan history."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from foodsafe.domain.assessments import AssessmentResult, Verdict
from foodsafe.domain.labels import LabelExtraction


@dataclass(frozen=True)
class CallerIdentity:
    """Caller whose token has been verified by the auth provider."""

    user_id: UUID
    email: str | None = None


@dataclass(frozen=True)
class ScanRecord:
    """Assessment persisted in a user's scan history."""

    id: UUID
    user_id: UUID
    product_name: str
    label: LabelExtraction
    result: AssessmentResult
    created_at: datetime
    image_url: str | None = None


@dataclass(frozen=True)
class HistorySummary:
    """Verdict counts and the latest scans for a user."""

    total: int
    counts: dict[Verdict, int] = field(default_factory=dict)
    recent: list[ScanRecord] = field(default_factory=list)
