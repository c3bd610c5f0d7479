import asyncio
import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from veo_studio.config import settings
from veo_studio.models.schemas import DisplayOptions, VideoRequest
from veo_studio.services.errors import (
    JobAlreadyRunningError,
    MissingCredentialError,
    MissingPromptError,
    MissingVideoUriError,
    VideoGenerationError,
)
from veo_studio.services.form_state import FormState
from veo_studio.services.genai_client import VeoClient, raise_for_operation_error, video_uri
from veo_studio.services.loading_messages import loading_message
from veo_studio.services.polling import Sleep, poll_until
from veo_studio.services.request_builder import build_request

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "An unknown error occurred during video generation."

RUNNING_STATES = {"submitting", "polling"}


class JobNotFoundError(RuntimeError):
    pass


@dataclass
class VideoAsset:
    data: bytes
    content_type: str = "video/mp4"


@dataclass
class VideoJob:
    job_id: str
    options: DisplayOptions = field(default_factory=DisplayOptions)
    status: str = "submitting"
    error: Optional[str] = None
    started_at: float = field(default_factory=time.monotonic)
    operation_name: Optional[str] = None
    asset: Optional[VideoAsset] = None

    @property
    def running(self) -> bool:
        return self.status in RUNNING_STATES


_CURRENT_JOB: Optional[VideoJob] = None
_SLOT_LOCK = threading.Lock()


def current_job() -> Optional[VideoJob]:
    return _CURRENT_JOB


def reset_job() -> None:
    global _CURRENT_JOB
    _CURRENT_JOB = None


def validate_inputs(api_key: str, prompt: str) -> None:
    if not (api_key or "").strip():
        raise MissingCredentialError()
    if not (prompt or "").strip():
        raise MissingPromptError()


def start_video_job(request: VideoRequest, form: FormState):
    """Validate the form and claim the job slot. No network call happens here.

    Returns the new job and the request payload to hand to ``run_job``.
    A request that fails to build discards the previous result, while a
    missing credential or prompt leaves it in place.
    """
    global _CURRENT_JOB
    with _SLOT_LOCK:
        if _CURRENT_JOB is not None and _CURRENT_JOB.running:
            raise JobAlreadyRunningError()

        form.update(request)
        validate_inputs(form.api_key, form.prompt)
        try:
            payload = build_request(form.prompt, form.image)
        except VideoGenerationError:
            _discard_current_job()
            raise

        _discard_current_job()
        job = VideoJob(job_id=uuid.uuid4().hex, options=form.options.model_copy())
        _CURRENT_JOB = job
    logger.info("Started video job %s with model %s", job.job_id, payload["model"])
    return job, payload


def _discard_current_job() -> None:
    global _CURRENT_JOB
    if _CURRENT_JOB is not None:
        logger.info("Discarding previous job %s", _CURRENT_JOB.job_id)
    _CURRENT_JOB = None


async def run_job(
    job: VideoJob,
    payload: Dict[str, Any],
    api_key: str,
    client_factory: Optional[Callable[[str], Any]] = None,
    sleep: Sleep = asyncio.sleep,
    interval: Optional[float] = None,
) -> VideoJob:
    interval = interval if interval is not None else settings.veo_poll_interval_seconds
    try:
        client = (client_factory or VeoClient)(api_key)
        job.status = "submitting"
        operation = await client.submit(payload)
        job.operation_name = getattr(operation, "name", None)

        job.status = "polling"
        operation = await poll_until(
            client.refresh,
            operation,
            lambda op: bool(getattr(op, "done", False)),
            interval,
            sleep=sleep,
        )
        raise_for_operation_error(operation)

        uri = video_uri(operation)
        if not uri:
            raise MissingVideoUriError()

        data, content_type = await client.fetch_asset(uri)
        job.asset = VideoAsset(data=data, content_type=content_type or "video/mp4")
        job.status = "completed"
        logger.info("Video job %s completed (%d bytes)", job.job_id, len(data))
    except Exception as exc:
        logger.exception("Video job %s failed", job.job_id)
        job.status = "failed"
        job.error = str(exc) or UNKNOWN_ERROR
    return job


def get_job_status(now: Optional[float] = None) -> Dict[str, Any]:
    job = _CURRENT_JOB
    if job is None:
        return {"status": "idle"}
    return _serialize_job(job, now if now is not None else time.monotonic())


def get_video_asset() -> VideoAsset:
    job = _CURRENT_JOB
    if job is None or job.asset is None:
        raise JobNotFoundError("No generated video is available.")
    return job.asset


def _serialize_job(job: VideoJob, now: float) -> Dict[str, Any]:
    return {
        "job_id": job.job_id,
        "status": job.status,
        "error": job.error,
        "loading_message": loading_message(now - job.started_at) if job.running else None,
        "video_url": f"/api/video?v={job.job_id}" if job.asset is not None else None,
        "options": job.options,
    }
