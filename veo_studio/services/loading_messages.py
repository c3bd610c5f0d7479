from typing import Optional

from veo_studio.config import settings

LOADING_MESSAGES = (
    "Warming up the digital director...",
    "Setting up the virtual cameras...",
    "Adjusting the lighting and composition...",
    "Rendering the first few frames...",
    "This can take a few minutes, please be patient.",
    "Adding special effects and sound...",
    "Finalizing the video masterpiece...",
)


def loading_message(elapsed: float, interval: Optional[float] = None) -> str:
    interval = interval or settings.loading_message_interval_seconds
    index = int(max(elapsed, 0.0) // interval) % len(LOADING_MESSAGES)
    return LOADING_MESSAGES[index]
