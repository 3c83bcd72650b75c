from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Optional

import pytest
from fastapi.testclient import TestClient

from src.upload_service.app import create_app
from src.upload_service.storage import LocalFileStorage, StorageClient


class FakeStorageClient(StorageClient):
    """In-memory storage client for testing."""
    def __init__(self):
        self.ensure_calls = 0
        self.objects: dict[str, bytes] = {}

    def ensure_area(self) -> None:
        self.ensure_calls += 1

    def write_new(
        self,
        key: str,
        stream: BinaryIO,
        expected_size: Optional[int] = None,
    ) -> int:
        content = stream.read()
        self.objects[key] = content
        return len(content)


class NonSeekableStream:
    """Readable stream that cannot report its length, like a socket."""
    def __init__(self, content: bytes):
        self._buffer = BytesIO(content)

    def read(self, size: int = -1) -> bytes:
        return self._buffer.read(size)

    def seekable(self) -> bool:
        return False


class FailingStream:
    """Stream that yields some chunks and then fails, like a dropped client."""
    def __init__(self, chunks: list[bytes], error: Exception):
        self._chunks = list(chunks)
        self._error = error
        self.reads = 0

    def read(self, size: int = -1) -> bytes:
        self.reads += 1
        if self._chunks:
            return self._chunks.pop(0)
        raise self._error


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    """Storage area that does not exist yet."""
    return tmp_path / "wwwroot" / "uploads"


@pytest.fixture
def local_storage(storage_root: Path) -> LocalFileStorage:
    return LocalFileStorage(storage_root, chunk_size=4)


@pytest.fixture
def fake_storage() -> FakeStorageClient:
    return FakeStorageClient()


@pytest.fixture
def client(local_storage: LocalFileStorage) -> TestClient:
    """FastAPI test client writing to a temporary storage area."""
    app = create_app(storage_client=local_storage)
    return TestClient(app)
