import logging

from fastapi import APIRouter, BackgroundTasks, File, HTTPException, Response, UploadFile

from veo_studio.config import settings
from veo_studio.models.schemas import ImageUploadResponse, JobStatusResponse, VideoRequest
from veo_studio.services import veo_service
from veo_studio.services.errors import InvalidImageError, JobAlreadyRunningError, VideoGenerationError
from veo_studio.services.form_state import get_form_state
from veo_studio.services.image_loader import read_image
from veo_studio.services.veo_service import JobNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.post("/image", response_model=ImageUploadResponse)
async def upload_image(file: UploadFile = File(...)):
    data = await file.read(settings.max_image_bytes + 1)
    try:
        image = read_image(data, file.content_type, settings.max_image_bytes)
    except InvalidImageError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    token = get_form_state().attach_image(image)
    return ImageUploadResponse(
        mime_type=image.mime_type,
        size=image.size,
        preview_url=f"/api/image/preview/{token}",
    )


@router.delete("/image", status_code=204)
def remove_image():
    get_form_state().remove_image()
    return Response(status_code=204)


@router.get("/image/preview/{token}")
def image_preview(token: str):
    image = get_form_state().previews.get(token)
    if image is None:
        raise HTTPException(status_code=404, detail="Preview not found.")
    return Response(content=image.data, media_type=image.mime_type)


@router.post("/generate-video", response_model=JobStatusResponse, status_code=202)
def generate_video(payload: VideoRequest, background_tasks: BackgroundTasks):
    try:
        job, request_payload = veo_service.start_video_job(payload, get_form_state())
    except JobAlreadyRunningError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except VideoGenerationError as exc:
        logger.info("Rejected generation request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    background_tasks.add_task(veo_service.run_job, job, request_payload, payload.api_key)
    return JobStatusResponse(**veo_service.get_job_status())


@router.get("/video-status", response_model=JobStatusResponse)
def get_video_status():
    return JobStatusResponse(**veo_service.get_job_status())


@router.get("/video")
def get_video(download: bool = False):
    try:
        asset = veo_service.get_video_asset()
    except JobNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    headers = {}
    if download:
        headers["Content-Disposition"] = f'attachment; filename="{settings.download_filename}"'
    return Response(content=asset.data, media_type=asset.content_type, headers=headers)


@router.get("/health")
def health_check():
    return {"status": "ok"}
