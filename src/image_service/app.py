from typing import Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from loguru import logger
from pydantic import BaseModel
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.image_service.config import ImageServiceConfig
from src.image_service.domain import PhotoSubmission, handle_image_upload, retrieve_current_image
from src.image_service.storage import SingleSlotStore
from src.image_service.widget import render_upload_widget
from src.shared.exceptions import (
    BadRequestError,
    ImageNotFoundError,
    UnauthorizedError,
    UnsupportedMediaTypeError,
)


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}
IMAGE_CACHE_CONTROL = "public, max-age=3600"


class ImageUploadResponse(BaseModel):
    success: bool = True
    filename: str
    url: str
    message: str = "Photo uploaded successfully!"


def _upload_failure(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


async def _read_photo(value) -> Optional[PhotoSubmission]:
    # Text fields named "photo" carry no file.
    if not isinstance(value, UploadFile):
        return None
    return PhotoSubmission(
        filename=value.filename or "",
        content_type=value.content_type,
        content=await value.read(),
    )


def create_app(store: SingleSlotStore, config: ImageServiceConfig) -> FastAPI:
    app = FastAPI(title="Image Slot Service")

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        # Unknown paths and unsupported methods both surface as a plain 404.
        if exc.status_code in (404, 405):
            return PlainTextResponse("Not Found", status_code=404)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    @app.post("/upload", response_model=ImageUploadResponse)
    async def upload_image(request: Request):
        """Replace the current image with the submitted photo.

        The form is read by hand so that a malformed submission still goes
        through the key check before any file validation.
        """
        try:
            form = await request.form()
            key = form.get("key")
            submission = await _read_photo(form.get("photo"))
            result = await run_in_threadpool(
                handle_image_upload,
                store=store,
                expected_key=config.upload_key,
                supplied_key=key if isinstance(key, str) else None,
                photo=submission,
            )
        except (UnauthorizedError, BadRequestError, UnsupportedMediaTypeError) as exc:
            logger.warning(
                "Upload rejected status={} error={}",
                exc.status_code,
                str(exc),
            )
            return _upload_failure(exc.status_code, str(exc))
        except Exception as exc:
            logger.exception("Upload failed error={}", str(exc))
            return _upload_failure(500, str(exc))

        logger.info(
            "Upload stored key={} original_name={} mime_type={} size_bytes={}",
            result.key,
            result.metadata.original_name,
            result.metadata.mime_type,
            result.metadata.size_bytes,
        )
        origin = str(request.base_url).rstrip("/")
        return ImageUploadResponse(filename=result.key, url=f"{origin}/image")

    @app.get("/image")
    def get_image() -> Response:
        try:
            image = retrieve_current_image(store)
        except ImageNotFoundError as exc:
            logger.info("Image lookup missed reason={}", str(exc))
            return PlainTextResponse(str(exc), status_code=404)
        except Exception as exc:
            logger.exception("Image retrieval failed error={}", str(exc))
            return PlainTextResponse(f"Error retrieving image: {exc}", status_code=500)

        return Response(
            content=image.content,
            media_type=image.mime_type,
            headers={"Cache-Control": IMAGE_CACHE_CONTROL},
        )

    @app.get("/")
    def deny_empty_key() -> Response:
        return PlainTextResponse("Access denied", status_code=403)

    @app.get("/{upload_key}", response_class=HTMLResponse)
    def upload_widget(upload_key: str) -> HTMLResponse:
        return HTMLResponse(render_upload_widget(upload_key))

    return app
