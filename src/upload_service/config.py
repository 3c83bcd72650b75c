import os
from pathlib import Path

from pydantic import BaseModel

from src.upload_service.storage import DEFAULT_CHUNK_SIZE


class UploadServiceConfig(BaseModel):
    storage_root: Path
    chunk_size: int = DEFAULT_CHUNK_SIZE


def load_config() -> UploadServiceConfig:
    storage_root = Path(os.getenv("UPLOAD_STORAGE_ROOT", "wwwroot/uploads"))
    chunk_size = int(os.getenv("UPLOAD_CHUNK_SIZE", str(DEFAULT_CHUNK_SIZE)))

    return UploadServiceConfig(
        storage_root=storage_root,
        chunk_size=chunk_size,
    )
