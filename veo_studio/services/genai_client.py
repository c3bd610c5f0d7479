import base64
import binascii
import logging
from typing import Any, Dict, Optional, Tuple

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from veo_studio.config import settings
from veo_studio.services.errors import AssetFetchError, MalformedPromptError, OperationFailedError

logger = logging.getLogger(__name__)

_FORWARDED_KEYS = {"model", "prompt", "image", "config"}


class GenAIClientError(RuntimeError):
    """Raised when the GenAI client cannot be created or a call to it fails."""


def _decode_image(image: Any) -> Optional[types.Image]:
    if image is None:
        return None
    if not isinstance(image, dict):
        raise MalformedPromptError("The 'image' field must be an object with 'imageBytes' and 'mimeType'.")
    encoded = image.get("imageBytes") or image.get("image_bytes")
    try:
        image_bytes = base64.b64decode(encoded, validate=True) if encoded else None
    except (binascii.Error, TypeError, ValueError) as exc:
        raise MalformedPromptError("The 'image.imageBytes' field must be base64 encoded.") from exc
    return types.Image(
        image_bytes=image_bytes,
        mime_type=image.get("mimeType") or image.get("mime_type"),
        gcs_uri=image.get("gcsUri") or image.get("gcs_uri"),
    )


def to_generate_kwargs(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Translate a built request into keyword arguments for ``generate_videos``."""
    ignored = sorted(set(payload) - _FORWARDED_KEYS)
    if ignored:
        logger.warning("Ignoring unsupported request fields: %s", ", ".join(ignored))

    kwargs: Dict[str, Any] = {
        "model": payload["model"],
        "prompt": payload["prompt"],
    }
    image = _decode_image(payload.get("image"))
    if image is not None:
        kwargs["image"] = image
    config = payload.get("config")
    if config:
        if not isinstance(config, dict):
            raise MalformedPromptError("The 'config' field must be an object.")
        kwargs["config"] = types.GenerateVideosConfig.model_validate(config)
    return kwargs


def video_uri(operation: Any) -> Optional[str]:
    response = getattr(operation, "response", None) or getattr(operation, "result", None)
    videos = getattr(response, "generated_videos", None) or []
    if not videos:
        return None
    video = getattr(videos[0], "video", None)
    return getattr(video, "uri", None) or None


def raise_for_operation_error(operation: Any) -> None:
    error = getattr(operation, "error", None)
    if not error:
        return
    message = error.get("message") if isinstance(error, dict) else str(error)
    raise OperationFailedError(message or "Video generation failed.")


class VeoClient:
    """Google GenAI video calls plus the authenticated download of the result."""

    def __init__(self, api_key: str, timeout: Optional[float] = None) -> None:
        self._api_key = api_key
        self._timeout = timeout or settings.asset_fetch_timeout_seconds
        try:
            self._client = genai.Client(api_key=api_key)
        except Exception as exc:
            raise GenAIClientError("Unable to create the Google GenAI client. Check your API key.") from exc

    async def submit(self, payload: Dict[str, Any]) -> types.GenerateVideosOperation:
        kwargs = to_generate_kwargs(payload)
        try:
            return await self._client.aio.models.generate_videos(**kwargs)
        except genai_errors.APIError as exc:
            logger.error("Video generation request was rejected: %s", exc)
            raise GenAIClientError(exc.message or str(exc)) from exc

    async def refresh(self, operation: types.GenerateVideosOperation) -> types.GenerateVideosOperation:
        try:
            return await self._client.aio.operations.get(operation)
        except genai_errors.APIError as exc:
            logger.error("Unable to refresh operation %s: %s", operation.name, exc)
            raise GenAIClientError(exc.message or str(exc)) from exc

    async def fetch_asset(self, uri: str) -> Tuple[bytes, str]:
        async with httpx.AsyncClient(timeout=self._timeout, follow_redirects=True) as client:
            response = await client.get(httpx.URL(uri).copy_merge_params({"key": self._api_key}))
        if not response.is_success:
            raise AssetFetchError(response.status_code, response.reason_phrase)
        content_type = response.headers.get("content-type", "video/mp4").split(";")[0]
        return response.content, content_type
