import os
from pydantic import BaseModel


DEFAULT_UPLOAD_KEY = "your-upload-key"


class ImageServiceConfig(BaseModel):
    upload_key: str
    mongo_uri: str
    mongo_db_name: str
    mongo_collection: str
    log_level: str = "INFO"


def load_config() -> ImageServiceConfig:
    upload_key = os.getenv("UPLOAD_KEY") or DEFAULT_UPLOAD_KEY
    mongo_uri = os.getenv("MONGO_URI", "mongodb://mongo:27017/")
    mongo_db_name = os.getenv("MONGO_DB_NAME", "image_slot")
    mongo_collection = os.getenv("MONGO_COLLECTION", "images")
    log_level = os.getenv("LOG_LEVEL", "INFO")

    return ImageServiceConfig(
        upload_key=upload_key,
        mongo_uri=mongo_uri,
        mongo_db_name=mongo_db_name,
        mongo_collection=mongo_collection,
        log_level=log_level,
    )
