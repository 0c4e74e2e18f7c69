"""Scan analysis and history endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status

from foodsafe.api.auth import require_identity
from foodsafe.api.models import CreateScanRequest, ExtractLabelRequest
from foodsafe.containers import AppContainer
from foodsafe.domain.models import CallerIdentity, HistorySummary, ScanRecord

router = APIRouter(prefix="/scans", tags=["scans"])


@router.post("/extract")
async def extract_label(
    body: ExtractLabelRequest,
    request: Request,
    identity: CallerIdentity = Depends(require_identity),
) -> dict[str, object]:
    """Read label data from a photo so the user can review it."""
    container: AppContainer = request.app.state.container
    label = await container.extraction_service.extract_data_uri(body.image_data_uri)
    return label.model_dump(mode="json")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_scan(
    body: CreateScanRequest,
    request: Request,
    identity: CallerIdentity = Depends(require_identity),
) -> dict[str, object]:
    """Assess a label against the caller's profile and save it."""
    container: AppContainer = request.app.state.container
    scan = await container.scan_service.analyze_and_save(
        identity, body.label, image_url=body.image_url
    )
    return _serialize_scan(scan)


@router.get("")
def list_scans(
    request: Request,
    limit: int | None = Query(default=None, ge=1, le=200),
    identity: CallerIdentity = Depends(require_identity),
) -> dict[str, object]:
    """Return the caller's scan history, newest first."""
    container: AppContainer = request.app.state.container
    scans = container.scan_service.list_history(
        identity, limit or container.settings.history_page_size
    )
    return {"scans": [_serialize_scan(scan) for scan in scans]}


@router.get("/summary")
def scan_summary(
    request: Request, identity: CallerIdentity = Depends(require_identity)
) -> dict[str, object]:
    """Return verdict counts and recent scans for the dashboard."""
    container: AppContainer = request.app.state.container
    return _serialize_summary(container.scan_service.summarize(identity))


@router.get("/{scan_id}")
def get_scan(
    scan_id: UUID,
    request: Request,
    identity: CallerIdentity = Depends(require_identity),
) -> dict[str, object]:
    """Return one of the caller's scans."""
    container: AppContainer = request.app.state.container
    return _serialize_scan(container.scan_service.get_scan(identity, scan_id))


@router.delete("/{scan_id}")
def delete_scan(
    scan_id: UUID,
    request: Request,
    identity: CallerIdentity = Depends(require_identity),
) -> Response:
    """Delete one of the caller's scans."""
    container: AppContainer = request.app.state.container
    container.scan_service.delete_scan(identity, scan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _serialize_scan(scan: ScanRecord) -> dict[str, object]:
    return {
        "id": str(scan.id),
        "product_name": scan.product_name,
        "image_url": scan.image_url,
        "created_at": scan.created_at.isoformat(),
        "label": scan.label.model_dump(mode="json"),
        "result": scan.result.model_dump(mode="json", by_alias=True),
    }


def _serialize_summary(summary: HistorySummary) -> dict[str, object]:
    return {
        "total": summary.total,
        "counts": {verdict.value: count for verdict, count in summary.counts.items()},
        "recent": [_serialize_scan(scan) for scan in summary.recent],
    }
