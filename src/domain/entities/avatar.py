"""Avatar upload value object."""

from dataclasses import dataclass

import filetype

ACCEPTED_IMAGE_TYPES: frozenset[str] = frozenset(
    {"image/png", "image/jpeg", "image/gif", "image/webp"}
)


def detect_image_type(data: bytes) -> str | None:
    """MIME type sniffed from the file's leading bytes, if it is an accepted image.

    The client-supplied Content-Type is not trusted.
    """
    mime_type = filetype.guess_mime(data)
    return mime_type if mime_type in ACCEPTED_IMAGE_TYPES else None


@dataclass(frozen=True, slots=True)
class AvatarUpload:
    """Raw avatar bytes received alongside a profile write."""

    data: bytes
    filename: str = "avatar"

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def detected_type(self) -> str | None:
        return detect_image_type(self.data)
