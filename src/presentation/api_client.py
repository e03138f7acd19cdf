"""HTTP client for the profile API."""

import json
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from api.schemas.profile import ProfileResponse
from domain.entities.profile import Profile
from presentation.forms import ProfileFormValues

logger = structlog.get_logger()


class ApiError(Exception):
    """Non-success response from the profile API."""

    def __init__(self, status_code: int, message: str, data: Any | None = None) -> None:
        self.status_code = status_code
        self.message = message
        self.data = data
        super().__init__(message)


class ApiConflictError(ApiError):
    """The server rejected a write because the version was stale."""

    def __init__(self, message: str, current_version: int, data: Any | None = None) -> None:
        self.current_version = current_version
        super().__init__(409, message, data)


@dataclass(frozen=True, slots=True)
class AvatarFile:
    """A local file to upload as the avatar."""

    filename: str
    data: bytes
    content_type: str = "application/octet-stream"


class ProfileApiClient:
    """Async client for ``GET /profile`` and ``PUT /profile``."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ProfileApiClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_profile(self) -> Profile:
        """Fetch the profile (a draft with version 0 if none exists)."""
        response = await self._client.get("/profile")
        return self._parse_profile(response)

    async def update_profile(
        self,
        values: ProfileFormValues,
        version: int,
        avatar: AvatarFile | None = None,
    ) -> Profile:
        """Submit every field plus the last-known version.

        Raises:
            ApiConflictError: the stored version moved on
            ApiError: any other non-2xx response
        """
        data = {
            "name": values.name,
            "email": values.email,
            "bio": values.bio,
            "avatarUrl": values.avatar_url,
            "skills": json.dumps(values.skills),
            "socialLinks": json.dumps(values.social_links),
            "version": str(version),
        }
        files = None
        if avatar is not None:
            files = {"avatar": (avatar.filename, avatar.data, avatar.content_type)}

        response = await self._client.put("/profile", data=data, files=files)
        return self._parse_profile(response)

    def _parse_profile(self, response: httpx.Response) -> Profile:
        if response.is_success:
            return ProfileResponse.model_validate(response.json()).to_entity()
        raise self._error_from(response)

    @staticmethod
    def _error_from(response: httpx.Response) -> ApiError:
        try:
            body = response.json()
        except ValueError:
            body = None

        message = f"Request failed ({response.status_code})"
        if isinstance(body, dict) and body.get("message"):
            message = str(body["message"])

        logger.debug(
            "profile_api_error",
            status_code=response.status_code,
            message=message,
        )
        if response.status_code == 409 and isinstance(body, dict) and "currentVersion" in body:
            return ApiConflictError(message, int(body["currentVersion"]), body)
        return ApiError(response.status_code, message, body)
