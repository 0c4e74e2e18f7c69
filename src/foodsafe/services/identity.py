"""Caller identity verification."""

from dataclasses import dataclass
from typing import Protocol

from foodsafe.domain.errors import AuthenticationError
from foodsafe.domain.models import CallerIdentity


class IdentityVerifier(Protocol):
    """Interface for verifying access tokens with the auth provider."""

    def verify(self, access_token: str) -> CallerIdentity:
        """Return the identity behind a token or raise AuthenticationError."""


@dataclass
class IdentityService:
    """Resolves the verified caller for an Authorization header."""

    verifier: IdentityVerifier

    def authenticate(self, authorization: str | None) -> CallerIdentity:
        """Verify a bearer token and return the caller identity."""
        if not authorization:
            raise AuthenticationError("Missing Authorization header")
        scheme, _, token = authorization.strip().partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            raise AuthenticationError("Expected a Bearer token")
        return self.verifier.verify(token)
