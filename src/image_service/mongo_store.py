from pymongo.errors import PyMongoError

from src.image_service.storage import ImageMetadata, ObjectKey
from src.shared.exceptions import ImageNotFoundError, StoreReadError, StoreWriteError


class MongoImageStore:
    """Single-slot store backed by a MongoDB collection.

    Each object is one document: ``{"_id": key, "content": bytes, "metadata": {...}}``.
    """

    def __init__(self, client, db_name: str = "image_slot", collection_name: str = "images") -> None:
        """Initialize the store with a MongoDB client.

        Args:
            client: A MongoDB client (or mongomock client for testing).
            db_name: The database name to use. Defaults to "image_slot".
            collection_name: The collection holding image documents.
        """
        self._collection = client[db_name][collection_name]

    def list_all(self) -> list[ObjectKey]:
        try:
            return [doc["_id"] for doc in self._collection.find({}, {"_id": 1})]
        except PyMongoError as exc:
            raise StoreReadError(f"Failed to list images: {exc}") from exc

    def delete(self, key: ObjectKey) -> None:
        try:
            self._collection.delete_one({"_id": key})
        except PyMongoError as exc:
            raise StoreWriteError(f"Failed to delete image {key}: {exc}") from exc

    def put(self, key: str, content: bytes, metadata: ImageMetadata) -> None:
        """Upsert payload and metadata in a single document replace.

        Args:
            key: Object key.
            content: Raw image bytes.
            metadata: Metadata recorded at upload time.
        """
        document = {
            "_id": key,
            "content": content,
            "metadata": metadata.model_dump(),
        }
        try:
            self._collection.replace_one({"_id": key}, document, upsert=True)
        except PyMongoError as exc:
            raise StoreWriteError(f"Failed to store image {key}: {exc}") from exc

    def get(self, key: ObjectKey) -> bytes:
        doc = self._find(key, {"content": 1})
        if doc.get("content") is None:
            raise ImageNotFoundError(f"Image with key {key} has no content")
        return bytes(doc["content"])

    def get_metadata(self, key: ObjectKey) -> ImageMetadata:
        doc = self._find(key, {"metadata": 1})
        return ImageMetadata(**(doc.get("metadata") or {}))

    def _find(self, key: ObjectKey, projection: dict) -> dict:
        try:
            doc = self._collection.find_one({"_id": key}, projection)
        except PyMongoError as exc:
            raise StoreReadError(f"Failed to read image {key}: {exc}") from exc
        if doc is None:
            raise ImageNotFoundError(f"Image with key {key} not found")
        return doc
