"""Avatar storage protocol."""

from typing import Protocol


class IAvatarStorage(Protocol):
    """Persists avatar bytes and hands back a public reference."""

    async def save(self, data: bytes, filename: str) -> str:
        """Store the bytes under a unique name and return its public URL path."""
        ...

    async def delete(self, url: str) -> None:
        """Remove a stored avatar by the URL ``save`` returned; unknown URLs are ignored."""
        ...
