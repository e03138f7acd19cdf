"""Profile repository protocol."""

from typing import Protocol

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for the singleton Profile."""

    async def get(self) -> Profile | None:
        """Get the stored profile, if one has been created."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Insert the profile record.

        Raises VersionConflictError if another writer created it first and
        DuplicateEmailError if the email is taken.
        """
        ...

    async def update_if_version(
        self, profile: Profile, expected_version: int
    ) -> Profile | None:
        """Apply all fields and bump the version if it still equals expected_version.

        Returns the updated profile, or None when the stored version differs.
        """
        ...
