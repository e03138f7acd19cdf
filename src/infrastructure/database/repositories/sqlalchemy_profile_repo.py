"""SQLAlchemy implementation of Profile repository."""

from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import DuplicateEmailError, VersionConflictError
from domain.entities.profile import Profile, SocialLinks
from infrastructure.database.models import PROFILE_SINGLETON_ID, ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self) -> Profile | None:
        """Get the stored profile, if any."""
        stmt = (
            select(ProfileModel)
            .where(ProfileModel.id == PROFILE_SINGLETON_ID)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, profile: Profile) -> Profile:
        """Insert the singleton profile row."""
        model = self._to_model(profile)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as e:
            await self._session.rollback()
            if "email" in str(e.orig).lower():
                raise DuplicateEmailError(profile.email) from e
            # Another writer created the profile first
            current = await self.get()
            raise VersionConflictError(current.version if current else 1) from e
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update_if_version(
        self, profile: Profile, expected_version: int
    ) -> Profile | None:
        """Conditionally overwrite the profile and bump its version."""
        stmt = (
            update(ProfileModel)
            .where(
                ProfileModel.id == PROFILE_SINGLETON_ID,
                ProfileModel.version == expected_version,
            )
            .values(
                name=profile.name,
                email=profile.email,
                bio=profile.bio,
                avatar_url=profile.avatar_url,
                skills=list(profile.skills),
                social_links=profile.social_links.to_dict(),
                version=ProfileModel.version + 1,
                updated_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self._session.execute(stmt)
        except IntegrityError as e:
            await self._session.rollback()
            raise DuplicateEmailError(profile.email) from e

        if result.rowcount == 0:  # type: ignore[attr-defined]
            return None
        return await self.get()

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            name=model.name,
            email=model.email,
            bio=model.bio,
            avatar_url=model.avatar_url,
            skills=list(model.skills or []),
            social_links=SocialLinks.from_dict(model.social_links),
            version=model.version,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=PROFILE_SINGLETON_ID,
            name=entity.name,
            email=entity.email,
            bio=entity.bio,
            avatar_url=entity.avatar_url,
            skills=list(entity.skills),
            social_links=entity.social_links.to_dict(),
            version=entity.version,
            updated_at=entity.updated_at,
        )
