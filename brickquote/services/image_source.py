"""Job photo reference passed to the vision model."""

from dataclasses import dataclass
from typing import Optional

from brickquote.config.errors import InvalidInput

MEDIA_TYPES = {
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
}
DEFAULT_MEDIA_TYPE = "image/jpeg"


def get_media_type(uri: str) -> str:
    """Guess an image media type from a file name or URL."""
    path = uri.split("?", 1)[0]
    extension = path.rsplit(".", 1)[-1].lower() if "." in path else ""
    return MEDIA_TYPES.get(extension, DEFAULT_MEDIA_TYPE)


@dataclass(frozen=True)
class ImageSource:
    """Either inline base64 image data or a remote URL.

    Attributes:
        base64: Base64 image bytes, without a data URI prefix
        url: Publicly reachable image URL
        media_type: Media type for inline data (default image/jpeg)
    """

    base64: Optional[str] = None
    url: Optional[str] = None
    media_type: Optional[str] = None

    def to_image_url(self) -> str:
        """Value for the chat API's image_url field.

        Raises:
            InvalidInput: If neither base64 nor url is set.
        """
        if self.base64:
            data = self.base64.split(",", 1)[1] if self.base64.startswith("data:") else self.base64
            return f"data:{self.media_type or DEFAULT_MEDIA_TYPE};base64,{data}"
        if self.url:
            return self.url
        raise InvalidInput("Image is required (base64 or URL)", field="image")
