"""Profile editor controller.

Holds the view/edit mode and the locally displayed profile, applies
optimistic updates on submit and reconciles them with the server's answer.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from enum import StrEnum

import structlog

from domain.entities.profile import Profile
from presentation.api_client import ApiConflictError, ApiError, AvatarFile, ProfileApiClient
from presentation.forms import DEFAULT_AVATAR_MAX_BYTES, ProfileFormValues, validate_form

logger = structlog.get_logger()

# (level, message); level is one of "success", "error"
Notifier = Callable[[str, str], None]

CONFLICT_MESSAGE = "Version conflict. Refreshing latest profile..."
SAVED_MESSAGE = "Profile saved"


class EditorMode(StrEnum):
    VIEW = "view"
    EDIT = "edit"


def _discard(level: str, message: str) -> None:
    pass


class ProfileEditor:
    """View/edit state for the single profile."""

    def __init__(
        self,
        client: ProfileApiClient,
        notifier: Notifier | None = None,
        avatar_max_bytes: int = DEFAULT_AVATAR_MAX_BYTES,
    ) -> None:
        self._client = client
        self._notify = notifier or _discard
        self._avatar_max_bytes = avatar_max_bytes
        self.profile: Profile = Profile.draft()
        self.mode = EditorMode.EDIT
        self.errors: dict[str, str] = {}

    @property
    def version(self) -> int:
        """Version last seen from the server."""
        return self.profile.version

    async def load(self) -> Profile:
        """Fetch the profile; view it if one exists, otherwise start editing."""
        self.profile = await self._client.get_profile()
        self.mode = EditorMode.EDIT if self.profile.is_draft else EditorMode.VIEW
        return self.profile

    def start_editing(self) -> ProfileFormValues:
        """Switch to edit mode and return the prefilled form."""
        self.mode = EditorMode.EDIT
        self.errors = {}
        return ProfileFormValues.from_profile(self.profile)

    def cancel_editing(self) -> None:
        """Leave edit mode; a never-saved profile has nothing to view."""
        self.errors = {}
        if not self.profile.is_draft:
            self.mode = EditorMode.VIEW

    async def submit(
        self,
        values: ProfileFormValues,
        avatar: AvatarFile | None = None,
    ) -> bool:
        """Save the form. Returns True when the server accepted the write.

        Local validation failures are stored in ``errors`` and nothing is sent.
        """
        self.errors = validate_form(
            values,
            avatar_size=len(avatar.data) if avatar else None,
            avatar_max_bytes=self._avatar_max_bytes,
        )
        if self.errors:
            return False

        previous = self.profile
        optimistic = values.to_profile(version=previous.version)
        optimistic.updated_at = datetime.now(timezone.utc)
        self.profile = optimistic

        try:
            saved = await self._client.update_profile(values, previous.version, avatar)
        except ApiConflictError as e:
            self.profile = previous
            logger.info(
                "profile_conflict_refetch",
                submitted_version=previous.version,
                current_version=e.current_version,
            )
            self._notify("error", CONFLICT_MESSAGE)
            # Stay in edit mode so the user can resubmit against the fresh version
            self.profile = await self._client.get_profile()
            return False
        except ApiError as e:
            self.profile = previous
            if e.status_code == 400 and isinstance(e.data, dict):
                self.errors = _field_errors(e.data)
            self._notify("error", e.message or "Save failed")
            return False

        self.profile = saved
        self.mode = EditorMode.VIEW
        self._notify("success", SAVED_MESSAGE)
        return True


def _field_errors(body: dict) -> dict[str, str]:
    errors: dict[str, str] = {}
    for detail in body.get("details") or []:
        if isinstance(detail, dict) and "field" in detail:
            errors.setdefault(str(detail["field"]), str(detail.get("message", "")))
    return errors
