from pathlib import Path

import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from veo_studio.api.routes import router as api_router
from veo_studio.config import settings
from veo_studio.logging_config import configure_logging

logger = logging.getLogger(__name__)

configure_logging(settings.log_level)

app = FastAPI(title="VEO Video Generator", version="1.0.0")

app.include_router(api_router)

frontend_path = Path(__file__).parent / "frontend"

app.mount("/static", StaticFiles(directory=str(frontend_path)), name="static")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/", include_in_schema=False)
async def serve_index():
    index_file = frontend_path / "index.html"
    return FileResponse(index_file)
