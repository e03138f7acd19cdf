"""Profile API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from api.dependencies import get_profile_service
from api.schemas.common import ErrorResponse, ValidationErrorResponse, VersionConflictResponse
from api.schemas.profile import ProfileResponse
from core.config import settings
from core.exceptions import AvatarTooLargeError
from core.rate_limit import limiter
from domain.entities.avatar import AvatarUpload
from domain.services.profile_service import ProfileService
from domain.services.profile_validation import candidate_from_form

router = APIRouter(tags=["profile"])


@router.get(
    "/profile",
    response_model=ProfileResponse,
    summary="Get the profile",
)
@limiter.limit(settings.rate_limit_read)  # type: ignore[untyped-decorator]
async def get_profile(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """Get the profile, or an empty draft with version 0 if none was saved yet."""
    profile = await service.read()
    return ProfileResponse.from_entity(profile)


@router.put(
    "/profile",
    response_model=ProfileResponse,
    summary="Create or update the profile",
    responses={
        200: {"description": "Profile saved"},
        400: {"model": ValidationErrorResponse, "description": "Invalid fields"},
        409: {
            "model": VersionConflictResponse,
            "description": "Stale version or email already taken",
        },
        413: {"model": ErrorResponse, "description": "Avatar too large"},
    },
)
@limiter.limit(settings.rate_limit_write)  # type: ignore[untyped-decorator]
async def update_profile(
    request: Request,
    name: Annotated[str | None, Form()] = None,
    email: Annotated[str | None, Form()] = None,
    bio: Annotated[str | None, Form()] = None,
    avatar_url: Annotated[str | None, Form(alias="avatarUrl")] = None,
    skills: Annotated[
        str | None,
        Form(description="JSON array or comma-separated list"),
    ] = None,
    social_links: Annotated[
        str | None,
        Form(alias="socialLinks", description="JSON object keyed by platform"),
    ] = None,
    version: Annotated[
        str | None,
        Form(description="Version last read; ignored for the first save"),
    ] = None,
    avatar: Annotated[UploadFile | None, File()] = None,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """
    Save the profile as multipart form data.

    The write only succeeds when ``version`` equals the stored version; the
    response then carries the incremented version. An uploaded ``avatar``
    replaces ``avatarUrl``.
    """
    # An oversized upload is rejected before any field is looked at
    upload = None
    if avatar is not None and avatar.filename:
        data = await avatar.read(settings.avatar_max_bytes + 1)
        if len(data) > settings.avatar_max_bytes:
            raise AvatarTooLargeError(settings.avatar_max_bytes)
        upload = AvatarUpload(data=data, filename=avatar.filename)

    candidate, expected_version = candidate_from_form(
        {
            "name": name,
            "email": email,
            "bio": bio,
            "avatarUrl": avatar_url,
            "skills": skills,
            "socialLinks": social_links,
            "version": version,
        }
    )

    profile = await service.write(candidate, expected_version, upload)
    return ProfileResponse.from_entity(profile)
