from datetime import datetime
from typing import Any, Optional, Protocol

from pydantic import BaseModel


CANONICAL_KEY = "current-image"

# Uploads always write CANONICAL_KEY; objects written by anything else may
# carry backend-native ids (e.g. a Mongo ObjectId).
ObjectKey = Any


class ImageMetadata(BaseModel):
    original_name: str = ""
    mime_type: Optional[str] = None
    size_bytes: int = 0
    uploaded_at: Optional[datetime] = None


class SingleSlotStore(Protocol):
    """Key-value store holding the current image.

    The store itself does not enforce a single object; the upload handler
    keeps it at most one by clearing before every write.
    """

    def list_all(self) -> list[ObjectKey]:
        """Return the keys of every stored object, in backend order."""
        ...

    def delete(self, key: ObjectKey) -> None:
        """Remove the object under key. Does nothing if it is absent."""
        ...

    def put(self, key: str, content: bytes, metadata: ImageMetadata) -> None:
        """Write payload and metadata under key as one document.

        Raises:
            StoreWriteError: If the backend rejects the write.
        """
        ...

    def get(self, key: ObjectKey) -> bytes:
        """Return the payload stored under key.

        Raises:
            ImageNotFoundError: If nothing is stored under key.
        """
        ...

    def get_metadata(self, key: ObjectKey) -> ImageMetadata:
        """Return the metadata last written under key.

        Raises:
            ImageNotFoundError: If nothing is stored under key.
        """
        ...
