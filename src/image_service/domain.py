import secrets
from datetime import datetime, timezone
from typing import Optional

from loguru import logger
from pydantic import BaseModel

from src.image_service.storage import CANONICAL_KEY, ImageMetadata, ObjectKey, SingleSlotStore
from src.shared.exceptions import (
    BadRequestError,
    ImageNotFoundError,
    UnauthorizedError,
    UnsupportedMediaTypeError,
)


ALLOWED_MIME_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")
FALLBACK_MIME_TYPE = "image/jpeg"


class PhotoSubmission(BaseModel):
    filename: str
    content_type: Optional[str] = None
    content: bytes


class UploadResult(BaseModel):
    key: str
    metadata: ImageMetadata


class CurrentImage(BaseModel):
    key: ObjectKey
    content: bytes
    mime_type: str


def check_upload_key(supplied_key: Optional[str], expected_key: str) -> None:
    if not supplied_key or not secrets.compare_digest(
        supplied_key.encode("utf-8"), expected_key.encode("utf-8")
    ):
        raise UnauthorizedError("Unauthorized")


def validate_photo(photo: Optional[PhotoSubmission]) -> PhotoSubmission:
    """Reject submissions without a file, with a disallowed type, or with no bytes."""
    if photo is None or not photo.filename:
        raise BadRequestError("No file uploaded")
    if photo.content_type not in ALLOWED_MIME_TYPES:
        raise UnsupportedMediaTypeError(
            "Invalid file type. Only JPEG, PNG, GIF, and WebP allowed."
        )
    if len(photo.content) == 0:
        raise BadRequestError("Uploaded file is empty")
    return photo


def handle_image_upload(
    store: SingleSlotStore,
    expected_key: str,
    supplied_key: Optional[str],
    photo: Optional[PhotoSubmission],
) -> UploadResult:
    """
    Replace the stored image with the submitted photo.

    Validation happens before any store call. The clear and write phases
    are two separate store operations: a concurrent upload or read can
    observe the slot empty, or with another upload's object, in between.

    Args:
        store: Single-slot store to replace the image in
        expected_key: Configured upload secret
        supplied_key: Key sent with the submission
        photo: Submitted file, or None if the form had none

    Returns:
        UploadResult with the canonical key and recorded metadata

    Raises:
        UnauthorizedError: If the key is missing or wrong
        BadRequestError: If no file (or an empty file) was submitted
        UnsupportedMediaTypeError: If the MIME type is not allowed
        Any store error (caller should handle as 500)
    """
    check_upload_key(supplied_key, expected_key)
    photo = validate_photo(photo)

    existing_keys = store.list_all()
    for key in existing_keys:
        store.delete(key)
    if existing_keys:
        logger.debug("Cleared stored images keys={}", existing_keys)

    metadata = ImageMetadata(
        original_name=photo.filename,
        mime_type=photo.content_type,
        size_bytes=len(photo.content),
        uploaded_at=datetime.now(timezone.utc),
    )
    store.put(CANONICAL_KEY, photo.content, metadata)

    return UploadResult(key=CANONICAL_KEY, metadata=metadata)


def retrieve_current_image(store: SingleSlotStore) -> CurrentImage:
    """
    Read the first stored image and its content type.

    Raises:
        ImageNotFoundError: If the store is empty, or the listed object
            vanished before it could be read
        Any store error (caller should handle as 500)
    """
    keys = store.list_all()
    if not keys:
        raise ImageNotFoundError("No image found")

    key = keys[0]
    try:
        content = store.get(key)
    except ImageNotFoundError as exc:
        raise ImageNotFoundError("Image not found") from exc

    try:
        mime_type = store.get_metadata(key).mime_type
    except ImageNotFoundError:
        mime_type = None

    return CurrentImage(key=key, content=content, mime_type=mime_type or FALLBACK_MIME_TYPE)
