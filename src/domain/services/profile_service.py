"""Profile service layer with business logic."""

from collections.abc import Callable

import structlog

from core.exceptions import (
    AvatarTooLargeError,
    FieldError,
    ProfileValidationError,
    VersionConflictError,
)
from domain.entities.avatar import AvatarUpload
from domain.entities.profile import Profile, ProfileCandidate
from domain.repositories.avatar_storage import IAvatarStorage
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.profile_validation import validate_candidate

logger = structlog.get_logger()

DEFAULT_AVATAR_MAX_BYTES = 2 * 1024 * 1024


class ProfileService:
    """Service layer for reading and conditionally writing the profile."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        avatar_storage: IAvatarStorage,
        avatar_max_bytes: int = DEFAULT_AVATAR_MAX_BYTES,
    ) -> None:
        self._uow_factory = uow_factory
        self._avatars = avatar_storage
        self._avatar_max_bytes = avatar_max_bytes

    async def read(self) -> Profile:
        """Get the stored profile, or an empty draft with version 0."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get()
            return profile if profile else Profile.draft()

    async def write(
        self,
        candidate: ProfileCandidate,
        expected_version: int,
        avatar: AvatarUpload | None = None,
    ) -> Profile:
        """Create or update the profile.

        The first write ignores ``expected_version`` and stores version 1.
        Later writes succeed only when ``expected_version`` equals the stored
        version, and bump it by exactly one.

        Raises:
            ProfileValidationError: candidate or avatar is invalid
            AvatarTooLargeError: avatar exceeds the size limit
            VersionConflictError: stored version differs from expected_version
        """
        if avatar is not None and avatar.size > self._avatar_max_bytes:
            raise AvatarTooLargeError(self._avatar_max_bytes)
        errors = validate_candidate(candidate)
        if expected_version < 0:
            errors.append(FieldError("version", "Version must be a non-negative integer"))
        if avatar is not None:
            errors.extend(self._avatar_errors(avatar))
        if errors:
            raise ProfileValidationError(errors)

        async with self._uow_factory() as uow:
            existing = await uow.profiles.get()
            if existing and existing.version != expected_version:
                logger.info(
                    "profile_version_conflict",
                    expected_version=expected_version,
                    current_version=existing.version,
                )
                raise VersionConflictError(existing.version)

            stored_url = None
            if avatar is not None:
                stored_url = await self._avatars.save(avatar.data, avatar.filename)
                candidate.avatar_url = stored_url

            try:
                return await self._persist(uow, candidate, existing, expected_version)
            except Exception:
                # The profile never pointed at the new file
                if stored_url:
                    await self._avatars.delete(stored_url)
                raise

    async def _persist(
        self,
        uow: IUnitOfWork,
        candidate: ProfileCandidate,
        existing: Profile | None,
        expected_version: int,
    ) -> Profile:
        if not existing:
            created = await uow.profiles.create(Profile.from_candidate(candidate, version=1))
            await uow.commit()
            logger.info("profile_created", version=created.version)
            return created

        updated = await uow.profiles.update_if_version(
            Profile.from_candidate(candidate, version=existing.version + 1),
            expected_version,
        )
        if updated is None:
            # Lost a race with another writer between the read and the update
            current = await uow.profiles.get()
            current_version = current.version if current else existing.version
            logger.info(
                "profile_version_conflict",
                expected_version=expected_version,
                current_version=current_version,
            )
            raise VersionConflictError(current_version)

        await uow.commit()
        logger.info("profile_updated", version=updated.version)
        return updated

    def _avatar_errors(self, avatar: AvatarUpload) -> list[FieldError]:
        if avatar.size == 0:
            return [FieldError("avatar", "Avatar file is empty")]
        if avatar.detected_type is None:
            return [FieldError("avatar", "Avatar must be a PNG, JPEG, GIF or WebP image")]
        return []
