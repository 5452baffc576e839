import pytest
from fastapi.testclient import TestClient

from src.image_service.app import create_app
from src.image_service.config import ImageServiceConfig
from src.image_service.storage import ImageMetadata, SingleSlotStore
from src.shared.exceptions import ImageNotFoundError, StoreWriteError


UPLOAD_KEY = "secret"

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


class FakeImageStore(SingleSlotStore):
    """In-memory single-slot store that records every call."""
    def __init__(self) -> None:
        self.objects: dict[str, tuple[bytes, ImageMetadata]] = {}
        self.calls: list[tuple[str, str]] = []

    def list_all(self) -> list[str]:
        self.calls.append(("list_all", ""))
        return list(self.objects)

    def delete(self, key: str) -> None:
        self.calls.append(("delete", key))
        self.objects.pop(key, None)

    def put(self, key: str, content: bytes, metadata: ImageMetadata) -> None:
        self.calls.append(("put", key))
        self.objects[key] = (content, metadata)

    def get(self, key: str) -> bytes:
        self.calls.append(("get", key))
        if key not in self.objects:
            raise ImageNotFoundError(f"Image with key {key} not found")
        return self.objects[key][0]

    def get_metadata(self, key: str) -> ImageMetadata:
        self.calls.append(("get_metadata", key))
        if key not in self.objects:
            raise ImageNotFoundError(f"Image with key {key} not found")
        return self.objects[key][1]

    def add_object(self, key: str, content: bytes, mime_type: str | None = "image/png") -> None:
        self.objects[key] = (content, ImageMetadata(original_name=key, mime_type=mime_type, size_bytes=len(content)))

    @property
    def mutations(self) -> list[tuple[str, str]]:
        return [call for call in self.calls if call[0] in ("delete", "put")]


class FailingWriteImageStore(FakeImageStore):
    def put(self, key: str, content: bytes, metadata: ImageMetadata) -> None:
        raise StoreWriteError("Storage service unreachable")


class VanishingImageStore(FakeImageStore):
    """Lists an object that is gone by the time it is read."""
    def list_all(self) -> list[str]:
        return ["current-image"]


@pytest.fixture
def config() -> ImageServiceConfig:
    return ImageServiceConfig(
        upload_key=UPLOAD_KEY,
        mongo_uri="mongodb://localhost:27017/",
        mongo_db_name="image_slot",
        mongo_collection="images",
    )


@pytest.fixture
def fake_store() -> FakeImageStore:
    return FakeImageStore()


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_HEADER + b"p" * (12 * 1024 - len(PNG_HEADER))


@pytest.fixture
def client(fake_store: FakeImageStore, config: ImageServiceConfig) -> TestClient:
    """Create FastAPI test client with injected fake store."""
    app = create_app(store=fake_store, config=config)
    return TestClient(app)
