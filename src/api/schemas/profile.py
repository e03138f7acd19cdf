"""Pydantic schemas for Profile API."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from domain.entities.profile import Profile, SocialLinks


class CamelModel(BaseModel):
    """Serializes with camelCase keys, accepts either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProfileResponse(CamelModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Ada Lovelace",
                "email": "ada@example.com",
                "bio": "First programmer.",
                "avatarUrl": "/uploads/avatars/3f2c9d1e-ada.png",
                "skills": ["math", "poetry"],
                "socialLinks": {"github": "https://github.com/ada"},
                "updatedAt": "2026-01-28T10:00:00Z",
                "version": 3,
            }
        },
    )

    name: str
    email: str
    bio: str = ""
    avatar_url: str = ""
    skills: list[str] = Field(default_factory=list)
    social_links: dict[str, str] = Field(default_factory=dict)
    updated_at: datetime
    version: int

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileResponse":
        return cls(
            name=profile.name,
            email=profile.email,
            bio=profile.bio or "",
            avatar_url=profile.avatar_url or "",
            skills=list(profile.skills),
            social_links=profile.social_links.to_dict(),
            updated_at=profile.updated_at,
            version=profile.version,
        )

    def to_entity(self) -> Profile:
        return Profile(
            name=self.name,
            email=self.email,
            bio=self.bio or None,
            avatar_url=self.avatar_url or None,
            skills=list(self.skills),
            social_links=SocialLinks.from_dict(self.social_links),
            updated_at=self.updated_at,
            version=self.version,
        )
