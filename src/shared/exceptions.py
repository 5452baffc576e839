"""Exceptions for the shared module."""


class ImageServiceError(Exception):
    """Base class for image service errors."""
    status_code = 500


class UnauthorizedError(ImageServiceError):
    """Raised when the upload key is missing or does not match."""
    status_code = 401


class BadRequestError(ImageServiceError):
    """Raised when the submission carries no usable file."""
    status_code = 400


class UnsupportedMediaTypeError(ImageServiceError):
    """Raised when the declared MIME type is not allow-listed."""
    status_code = 400


class ImageNotFoundError(ImageServiceError):
    """Raised when no image, or no object under a given key, is stored."""
    status_code = 404


class StoreWriteError(ImageServiceError):
    """Raised when the backing store rejects a write or delete."""


class StoreReadError(ImageServiceError):
    """Raised when the backing store fails while reading."""
