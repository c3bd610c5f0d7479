import base64
import logging
import uuid
from dataclasses import dataclass
from typing import Dict, Optional

from veo_studio.services.errors import InvalidImageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReferenceImage:
    data: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.data)

    def encoded(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_payload(self) -> Dict[str, str]:
        return {"imageBytes": self.encoded(), "mimeType": self.mime_type}


def read_image(data: bytes, content_type: Optional[str], max_bytes: int) -> ReferenceImage:
    mime_type = (content_type or "").split(";")[0].strip().lower()
    if not mime_type.startswith("image/"):
        raise InvalidImageError("Reference image must be an image file.")
    if not data:
        raise InvalidImageError("Reference image is empty.")
    if len(data) > max_bytes:
        raise InvalidImageError(f"Reference image is too large. Maximum {max_bytes} bytes.")
    return ReferenceImage(data=data, mime_type=mime_type)


class PreviewRegistry:
    """Transient preview references handed to the page while an image is loaded."""

    def __init__(self) -> None:
        self._previews: Dict[str, ReferenceImage] = {}

    def create(self, image: ReferenceImage) -> str:
        token = uuid.uuid4().hex
        self._previews[token] = image
        return token

    def get(self, token: str) -> Optional[ReferenceImage]:
        return self._previews.get(token)

    def release(self, token: Optional[str]) -> None:
        if token and self._previews.pop(token, None) is not None:
            logger.debug("Released image preview %s", token)

    def __len__(self) -> int:
        return len(self._previews)
