"""Client-side profile form and validation.

Mirrors the server's field rules so problems show up before a round trip.
The server's answer is still authoritative.
"""

from dataclasses import dataclass, field

from core.exceptions import ProfileValidationError
from domain.entities.profile import Profile
from domain.services.profile_validation import candidate_from_form

DEFAULT_AVATAR_MAX_BYTES = 2 * 1024 * 1024


@dataclass
class ProfileFormValues:
    """What the user typed into the edit view."""

    name: str = ""
    email: str = ""
    bio: str = ""
    avatar_url: str = ""
    skills: list[str] = field(default_factory=list)
    social_links: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileFormValues":
        """Prefill the form from the current profile."""
        return cls(
            name=profile.name,
            email=profile.email,
            bio=profile.bio or "",
            avatar_url=profile.avatar_url or "",
            skills=list(profile.skills),
            social_links=profile.social_links.to_dict(),
        )

    def to_profile(self, version: int) -> Profile:
        """Sanitized local copy used for optimistic display."""
        candidate, _ = candidate_from_form(self.as_wire_fields())
        return Profile.from_candidate(candidate, version=version)

    def as_wire_fields(self) -> dict[str, object]:
        return {
            "name": self.name,
            "email": self.email,
            "bio": self.bio,
            "avatarUrl": self.avatar_url,
            "skills": self.skills,
            "socialLinks": self.social_links,
        }


def validate_form(
    values: ProfileFormValues,
    avatar_size: int | None = None,
    avatar_max_bytes: int = DEFAULT_AVATAR_MAX_BYTES,
) -> dict[str, str]:
    """Return ``{field: message}`` for every invalid field; empty when valid."""
    errors: dict[str, str] = {}
    try:
        candidate_from_form(values.as_wire_fields())
    except ProfileValidationError as e:
        for error in e.errors:
            errors.setdefault(error.field, error.message)

    if avatar_size is not None and avatar_size > avatar_max_bytes:
        errors["avatar"] = f"Avatar too large (max {avatar_max_bytes / (1024 * 1024):g}MB)"
    return errors
