"""Profile domain entity."""

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone

SOCIAL_PLATFORMS: tuple[str, ...] = ("github", "linkedin", "twitter", "website")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SocialLinks:
    """Links to the profile owner's accounts on a fixed set of platforms."""

    github: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    website: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, str | None] | None) -> "SocialLinks":
        """Build from a mapping, ignoring keys outside the platform set."""
        if not data:
            return cls()
        return cls(**{key: data.get(key) or None for key in SOCIAL_PLATFORMS})

    def to_dict(self) -> dict[str, str]:
        """Only the platforms that have a link."""
        return {f.name: value for f in fields(self) if (value := getattr(self, f.name))}


@dataclass
class ProfileCandidate:
    """Field values submitted for a write, after sanitization."""

    name: str = ""
    email: str = ""
    bio: str | None = None
    avatar_url: str | None = None
    skills: list[str] = field(default_factory=list)
    social_links: SocialLinks = field(default_factory=SocialLinks)


@dataclass
class Profile:
    """Domain entity for the single editable profile."""

    name: str = ""
    email: str = ""
    bio: str | None = None
    avatar_url: str | None = None
    skills: list[str] = field(default_factory=list)
    social_links: SocialLinks = field(default_factory=SocialLinks)
    version: int = 0
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def draft(cls) -> "Profile":
        """Empty placeholder returned before any profile has been saved."""
        return cls()

    @classmethod
    def from_candidate(cls, candidate: ProfileCandidate, version: int) -> "Profile":
        return cls(
            name=candidate.name,
            email=candidate.email,
            bio=candidate.bio,
            avatar_url=candidate.avatar_url,
            skills=list(candidate.skills),
            social_links=candidate.social_links,
            version=version,
        )

    @property
    def is_draft(self) -> bool:
        """True until the first successful write."""
        return self.version == 0
