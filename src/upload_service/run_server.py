import logging

from src.upload_service.app import create_app
from src.upload_service.config import load_config
from src.upload_service.storage import LocalFileStorage


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

config = load_config()

_storage = LocalFileStorage(config.storage_root, chunk_size=config.chunk_size)

app = create_app(_storage)
