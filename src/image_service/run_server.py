import sys

from loguru import logger
from pymongo import MongoClient

from src.image_service.app import create_app
from src.image_service.config import ImageServiceConfig, load_config
from src.image_service.mongo_store import MongoImageStore


def configure_logging(config: ImageServiceConfig) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=config.log_level.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name}:{function}:{line} | {message}",
    )


config = load_config()
configure_logging(config)

_client = MongoClient(config.mongo_uri)
_store = MongoImageStore(
    _client,
    db_name=config.mongo_db_name,
    collection_name=config.mongo_collection,
)

app = create_app(_store, config)
