"""Request authentication dependency."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, Request

from foodsafe.domain.models import CallerIdentity  # noqa: TC001

if TYPE_CHECKING:
    from foodsafe.containers import AppContainer


def require_identity(
    request: Request,
    authorization: str | None = Header(default=None),
) -> CallerIdentity:
    """Resolve the verified caller for the request."""
    container: AppContainer = request.app.state.container
    return container.identity_service.authenticate(authorization)
