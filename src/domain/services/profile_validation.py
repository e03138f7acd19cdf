"""Sanitization and field validation for profile writes.

Raw input (multipart form strings, JSON-ish values) is parsed by the
``ProfileUpdate`` model: "before" validators trim and normalize, the field
constraints enforce the limits. Every problem is reported as a
``FieldError`` so callers can show all offending fields at once.
"""

import json
from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import ErrorDetails, PydanticCustomError

from core.exceptions import FieldError, ProfileValidationError
from domain.entities.profile import ProfileCandidate, SocialLinks

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 200
BIO_MAX_LENGTH = 500
AVATAR_URL_MAX_LENGTH = 500
SOCIAL_LINK_MAX_LENGTH = 200
MAX_SKILLS = 30

VERSION_MESSAGE = "Version must be a non-negative integer"

SocialLink = Annotated[str, StringConstraints(max_length=SOCIAL_LINK_MAX_LENGTH)]
Skill = Annotated[str, StringConstraints(min_length=1)]


def sanitize_string(value: Any) -> str:
    """Trim strings; anything that is not a string becomes empty."""
    if not isinstance(value, str):
        return ""
    return value.strip()


def sanitize_email(value: Any) -> str:
    return sanitize_string(value).lower()


def sanitize_skills(value: Any) -> list[str]:
    """Normalize skills into a list of at most 30, without repeats.

    Accepts a list, a JSON array string, or a comma-separated string. The
    first 30 entries are kept, then repeats among them are dropped.
    """
    items: list[str] = []
    if isinstance(value, (list, tuple)):
        items = [str(item) for item in value]
    elif isinstance(value, str):
        try:
            parsed = json.loads(value)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            items = [str(item) for item in parsed]
        else:
            items = value.split(",")

    cleaned = [item.strip() for item in items if item.strip()]
    return list(dict.fromkeys(cleaned[:MAX_SKILLS]))


class SocialLinksInput(BaseModel):
    """Links keyed by platform; any other key is rejected."""

    model_config = ConfigDict(extra="forbid")

    github: SocialLink | None = None
    linkedin: SocialLink | None = None
    twitter: SocialLink | None = None
    website: SocialLink | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_empty(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        return {str(key): link for key, value in data.items() if (link := sanitize_string(value))}


class ProfileUpdate(BaseModel):
    """A profile write as submitted by a client (camelCase keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    email: EmailStr
    bio: str | None = Field(default=None, max_length=BIO_MAX_LENGTH)
    avatar_url: str | None = Field(default=None, max_length=AVATAR_URL_MAX_LENGTH)
    skills: list[Skill] = Field(default_factory=list, max_length=MAX_SKILLS)
    social_links: SocialLinksInput = Field(default_factory=SocialLinksInput)
    version: int = Field(default=0, ge=0)

    @field_validator("name", mode="before")
    @classmethod
    def _trim_name(cls, value: Any) -> str:
        return sanitize_string(value)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: Any) -> str:
        return sanitize_email(value)

    @field_validator("email")
    @classmethod
    def _limit_email(cls, value: str) -> str:
        if len(value) > EMAIL_MAX_LENGTH:
            raise PydanticCustomError(
                "string_too_long",
                "Email too long (max {max_length})",
                {"max_length": EMAIL_MAX_LENGTH},
            )
        return value

    @field_validator("bio", "avatar_url", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> str | None:
        return sanitize_string(value) or None

    @field_validator("skills", mode="before")
    @classmethod
    def _split_skills(cls, value: Any) -> list[str]:
        return sanitize_skills(value)

    @field_validator("social_links", mode="before")
    @classmethod
    def _parse_social_links(cls, value: Any) -> Any:
        if value is None or value == "":
            return {}
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except ValueError:
                value = None
        if not isinstance(value, Mapping):
            raise PydanticCustomError("social_links_type", "Social links must be a JSON object")
        return value

    @field_validator("version", mode="before")
    @classmethod
    def _missing_version(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return 0
        if isinstance(value, bool):
            raise PydanticCustomError("int_type", VERSION_MESSAGE)
        return value

    def to_candidate(self) -> ProfileCandidate:
        return ProfileCandidate(
            name=self.name,
            email=self.email,
            bio=self.bio,
            avatar_url=self.avatar_url,
            skills=list(self.skills),
            social_links=SocialLinks(**self.social_links.model_dump()),
        )


_LABELS = {
    "name": "Name",
    "email": "Email",
    "bio": "Bio",
    "avatarUrl": "Avatar URL",
    "socialLinks": "Link",
}


def _message(field_name: str, error: ErrorDetails) -> str:
    root = field_name.split(".", 1)[0]
    kind = error["type"]
    ctx = error.get("ctx") or {}
    if root == "version":
        return VERSION_MESSAGE
    if root == "email" and kind != "string_too_long":
        return "Invalid email address"
    if kind == "extra_forbidden":
        return "Unknown platform"
    if kind == "string_too_short":
        return "Name is required" if root == "name" else "Skill must not be empty"
    if kind == "string_too_long":
        return f"{_LABELS.get(root, root)} too long (max {ctx['max_length']})"
    if kind == "too_long":
        return f"Too many skills (max {ctx['max_length']})"
    return error["msg"]


def field_errors(exc: ValidationError) -> list[FieldError]:
    """Flatten pydantic errors into per-field messages keyed by wire name."""
    errors = []
    for error in exc.errors():
        field_name = ".".join(str(part) for part in error["loc"]) or "request"
        errors.append(FieldError(field_name, _message(field_name, error)))
    return errors


def candidate_from_form(data: Mapping[str, Any]) -> tuple[ProfileCandidate, int]:
    """Sanitize raw form fields into a candidate and expected version.

    ``data`` uses the wire field names (``avatarUrl``, ``socialLinks``).

    Raises:
        ProfileValidationError: listing every offending field
    """
    try:
        update = ProfileUpdate.model_validate(data)
    except ValidationError as e:
        raise ProfileValidationError(field_errors(e)) from e
    return update.to_candidate(), update.version


def validate_candidate(candidate: ProfileCandidate) -> list[FieldError]:
    """Check an already-built candidate against the profile field limits."""
    try:
        ProfileUpdate(
            name=candidate.name,
            email=candidate.email,
            bio=candidate.bio,
            avatar_url=candidate.avatar_url,
            skills=candidate.skills,
            social_links=candidate.social_links.to_dict(),
        )
    except ValidationError as e:
        return field_errors(e)
    return []
