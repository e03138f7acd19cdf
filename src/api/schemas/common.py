"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error_code: str
    message: str
    details: Any | None = None


class FieldErrorDetail(BaseModel):
    """One offending field in a validation error."""

    field: str
    message: str


class ValidationErrorResponse(ErrorResponse):
    """Validation error with per-field messages."""

    details: list[FieldErrorDetail]


class VersionConflictResponse(ErrorResponse):
    """Version conflict, carrying the stored version to re-read from."""

    model_config = ConfigDict(populate_by_name=True)

    current_version: int = Field(alias="currentVersion")
