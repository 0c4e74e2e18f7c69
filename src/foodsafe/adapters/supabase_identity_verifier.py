"""Supabase Auth access token verification."""

from dataclasses import dataclass
from uuid import UUID

from supabase import AuthError, Client

from foodsafe.domain.errors import AuthenticationError
from foodsafe.domain.models import CallerIdentity
from foodsafe.services.identity import IdentityVerifier


@dataclass
class SupabaseIdentityVerifier(IdentityVerifier):
    """Verifies user access tokens against Supabase Auth."""

    client: Client

    def verify(self, access_token: str) -> CallerIdentity:
        """Return the identity behind an access token."""
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError as exc:
            raise AuthenticationError("Invalid access token") from exc
        user = response.user if response else None
        if user is None:
            raise AuthenticationError("Invalid access token")
        return CallerIdentity(user_id=UUID(str(user.id)), email=user.email)
