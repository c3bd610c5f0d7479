from typing import Literal, Optional

from pydantic import BaseModel, Field

AspectRatio = Literal["16:9", "9:16"]
Resolution = Literal["720p", "1080p"]


class DisplayOptions(BaseModel):
    """Options shown on the form. They are never sent to the video API."""

    aspect_ratio: AspectRatio = "16:9"
    resolution: Resolution = "720p"
    sound_enabled: bool = True


class VideoRequest(DisplayOptions):
    api_key: str = Field("", description="Google API key, passed through to the GenAI client")
    prompt: str = Field("", description="Plain text prompt or a JSON request object")


class ImageUploadResponse(BaseModel):
    mime_type: str
    size: int
    preview_url: str


class JobStatusResponse(BaseModel):
    job_id: Optional[str] = None
    status: str
    error: Optional[str] = None
    loading_message: Optional[str] = None
    video_url: Optional[str] = None
    options: Optional[DisplayOptions] = None
