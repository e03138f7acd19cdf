"""Custom exceptions and error codes."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Conflict errors (409)
    VERSION_CONFLICT = "VERSION_CONFLICT"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"

    # Payload errors (413)
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


@dataclass(frozen=True, slots=True)
class FieldError:
    """A problem with one input field."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


class ProfileValidationError(AppException):
    """One or more profile fields are invalid."""

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = errors
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message="Validation error",
            status_code=400,
            details=[error.to_dict() for error in errors],
        )

    @property
    def fields(self) -> list[str]:
        """Names of the offending fields, in report order."""
        return [error.field for error in self.errors]


class VersionConflictError(AppException):
    """Submitted version does not match the stored version."""

    def __init__(self, current_version: int) -> None:
        self.current_version = current_version
        super().__init__(
            error_code=ErrorCode.VERSION_CONFLICT,
            message="Version conflict. Please refresh and try again.",
            status_code=409,
            details={"currentVersion": current_version},
        )


class DuplicateEmailError(AppException):
    """Email already belongs to a stored profile."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_EMAIL,
            message="Email already exists",
            status_code=409,
            details={"email": email},
        )


class AvatarTooLargeError(AppException):
    """Uploaded avatar exceeds the configured size limit."""

    def __init__(self, max_bytes: int) -> None:
        max_mb = max_bytes / (1024 * 1024)
        super().__init__(
            error_code=ErrorCode.PAYLOAD_TOO_LARGE,
            message=f"Avatar too large (max {max_mb:g}MB)",
            status_code=413,
            details={"maxBytes": max_bytes},
        )
