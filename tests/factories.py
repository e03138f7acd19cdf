"""Test data factories shared by unit and integration tests."""

from typing import Any

from domain.entities.profile import Profile, ProfileCandidate, SocialLinks

# Tiny payloads that pass magic-byte detection
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
GIF_BYTES = b"GIF89a" + b"\x00" * 32
WEBP_BYTES = b"RIFF\x24\x00\x00\x00WEBPVP8 " + b"\x00" * 24


def make_candidate(**overrides: Any) -> ProfileCandidate:
    """A valid candidate; override any field."""
    values: dict[str, Any] = {
        "name": "Ada Lovelace",
        "email": "ada@analytical.org",
        "bio": "First programmer.",
        "skills": ["math", "poetry"],
        "social_links": SocialLinks(github="https://github.com/ada"),
    }
    values.update(overrides)
    return ProfileCandidate(**values)


def make_profile(version: int = 1, **overrides: Any) -> Profile:
    """A stored profile at the given version."""
    return Profile.from_candidate(make_candidate(**overrides), version=version)


def form_fields(**overrides: Any) -> dict[str, str]:
    """Multipart form fields as the browser would send them."""
    fields = {
        "name": "Ada Lovelace",
        "email": "ada@analytical.org",
        "bio": "First programmer.",
        "skills": '["math", "poetry"]',
        "version": "0",
    }
    fields.update({key: str(value) for key, value in overrides.items()})
    return fields


def profile_payload(version: int = 1, **overrides: Any) -> dict[str, Any]:
    """JSON body of a profile response, as the API would return it."""
    from api.schemas.profile import ProfileResponse

    profile = make_profile(version=version, **overrides)
    return ProfileResponse.from_entity(profile).model_dump(mode="json", by_alias=True)


def draft_payload() -> dict[str, Any]:
    """JSON body of ``GET /profile`` before the first save."""
    from api.schemas.profile import ProfileResponse

    return ProfileResponse.from_entity(Profile.draft()).model_dump(mode="json", by_alias=True)
