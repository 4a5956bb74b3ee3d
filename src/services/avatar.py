"""Avatar file checks and preview encoding shared by the form controller and the server."""

import base64
from dataclasses import dataclass

from src.i18n.config import Dictionary

DEFAULT_AVATAR_MAX_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class AvatarFile:
    """An avatar image selected by the user, held in memory."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


def check_avatar(
    file: AvatarFile,
    dictionary: Dictionary,
    max_bytes: int = DEFAULT_AVATAR_MAX_BYTES,
) -> str | None:
    """Return a localized error for an unacceptable avatar, or None.

    The MIME type must start with ``image/`` and the size must not exceed
    ``max_bytes``.
    """
    if not (file.content_type or "").lower().startswith("image/"):
        return dictionary.validation.avatar.invalid_type
    if file.size > max_bytes:
        return dictionary.validation.avatar.too_large
    return None


def to_data_url(file: AvatarFile) -> str:
    """Encode an avatar as a ``data:`` URL for previews."""
    encoded = base64.b64encode(file.data).decode("ascii")
    return f"data:{file.content_type};base64,{encoded}"
