"""Error taxonomy shared across the service."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """Single offending field in a rejected payload."""

    path: str
    message: str


class FoodSafeError(Exception):
    """Base class for errors surfaced to callers."""


class ValidationError(FoodSafeError):
    """Payload does not match the expected shape."""

    def __init__(self, errors: list[FieldError], message: str | None = None) -> None:
        self.errors = errors
        paths = ", ".join(error.path for error in errors) or "<root>"
        super().__init__(message or f"Invalid fields: {paths}")

    @property
    def paths(self) -> list[str]:
        """Return the dotted paths of all offending fields."""
        return [error.path for error in self.errors]


class InvalidModelOutput(ValidationError):
    """The model replied but the reply fails the output schema."""


class InferenceUnavailable(FoodSafeError):
    """The external model could not be reached or returned an error status."""


class AuthenticationError(FoodSafeError):
    """The caller identity token is missing or could not be verified."""


class ProfileNotFound(FoodSafeError):
    """The caller has not stored a health profile yet."""


class ScanNotFound(FoodSafeError):
    """The scan does not exist or is not owned by the caller."""
