"""Health profile endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from foodsafe.api.auth import require_identity
from foodsafe.containers import AppContainer
from foodsafe.domain.models import CallerIdentity

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("")
def get_profile(
    request: Request, identity: CallerIdentity = Depends(require_identity)
) -> dict[str, object]:
    """Return the caller's health profile."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.get_profile(identity)
    return profile.model_dump(mode="json")


@router.put("")
def update_profile(
    request: Request,
    payload: dict[str, Any] = Body(...),
    identity: CallerIdentity = Depends(require_identity),
) -> dict[str, object]:
    """Validate and store the caller's health profile."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.update_profile(identity, payload)
    return profile.model_dump(mode="json")
