import logging
from dataclasses import dataclass, field
from typing import Optional

from veo_studio.models.schemas import DisplayOptions, VideoRequest
from veo_studio.services.image_loader import PreviewRegistry, ReferenceImage

logger = logging.getLogger(__name__)


@dataclass
class FormState:
    api_key: str = ""
    prompt: str = ""
    options: DisplayOptions = field(default_factory=DisplayOptions)
    image: Optional[ReferenceImage] = None
    preview_token: Optional[str] = None
    previews: PreviewRegistry = field(default_factory=PreviewRegistry)

    def update(self, request: VideoRequest) -> None:
        self.api_key = request.api_key
        self.prompt = request.prompt
        self.options = DisplayOptions(
            aspect_ratio=request.aspect_ratio,
            resolution=request.resolution,
            sound_enabled=request.sound_enabled,
        )

    def attach_image(self, image: ReferenceImage) -> str:
        self.previews.release(self.preview_token)
        self.image = image
        self.preview_token = self.previews.create(image)
        logger.info("Loaded reference image (%s, %d bytes)", image.mime_type, image.size)
        return self.preview_token

    def remove_image(self) -> None:
        self.previews.release(self.preview_token)
        self.image = None
        self.preview_token = None


_FORM_STATE = FormState()


def get_form_state() -> FormState:
    return _FORM_STATE


def reset_form_state() -> FormState:
    global _FORM_STATE
    _FORM_STATE.remove_image()
    _FORM_STATE = FormState()
    return _FORM_STATE
