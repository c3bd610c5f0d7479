import json
import logging
from typing import Any, Dict, Optional

from veo_studio.config import settings
from veo_studio.services.errors import MalformedPromptError, MissingPromptError
from veo_studio.services.image_loader import ReferenceImage

logger = logging.getLogger(__name__)


def default_payload(model: Optional[str] = None) -> Dict[str, Any]:
    return {
        "model": model or settings.veo_model_id,
        "config": {"numberOfVideos": 1},
    }


def looks_structured(prompt: str) -> bool:
    return prompt.startswith("{")


def build_request(
    prompt: str,
    image: Optional[ReferenceImage] = None,
    model: Optional[str] = None,
) -> Dict[str, Any]:
    """Merge the prompt field (plain text or a JSON object) into the default request.

    Keys of a JSON object replace the defaults wholesale. An uploaded image is
    attached last and takes precedence over any image given in the JSON.
    """
    trimmed = (prompt or "").strip()
    payload = default_payload(model)

    if looks_structured(trimmed):
        try:
            user_payload = json.loads(trimmed)
        except json.JSONDecodeError as exc:
            raise MalformedPromptError() from exc
        if not isinstance(user_payload, dict):
            raise MalformedPromptError()
        payload.update(user_payload)
    else:
        payload["prompt"] = trimmed

    if image is not None:
        payload["image"] = image.to_payload()

    final_prompt = payload.get("prompt")
    if not isinstance(final_prompt, str) or not final_prompt.strip():
        raise MissingPromptError(
            "A 'prompt' string must be provided, either as plain text or within the JSON object."
        )

    logger.debug("Built request for model %s (keys: %s)", payload.get("model"), sorted(payload))
    return payload
