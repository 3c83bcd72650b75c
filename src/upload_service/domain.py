import logging
import os
import re
import uuid
from pathlib import PurePath
from typing import BinaryIO, Optional

from pydantic import BaseModel

from src.upload_service.exceptions import (
    EmptyInputError,
    KeyCollisionError,
    StorageUnavailableError,
    WriteFailedError,
)
from src.upload_service.storage import StorageClient


logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 128
FALLBACK_NAME = "file"


class UploadRequest:
    """A byte stream together with the name the client gave it."""

    def __init__(
        self,
        stream: Optional[BinaryIO],
        filename: Optional[str],
        size: Optional[int] = None,
    ):
        self.stream = stream
        self.filename = filename or ""
        self.size = size


class StoredUpload(BaseModel):
    key: str
    filename: str
    size: int


class _PeekedStream:
    """Replays an already-read first chunk before the rest of a stream."""

    def __init__(self, head: bytes, rest: BinaryIO):
        self._head = head
        self._rest = rest

    def read(self, size: int = -1) -> bytes:
        if self._head:
            if size is None or size < 0:
                data, self._head = self._head, b""
                return data + self._rest.read()
            data, self._head = self._head[:size], self._head[size:]
            return data
        return self._rest.read(size)


def sanitize_filename(filename: str) -> str:
    """Turn an untrusted display name into a single safe path segment.

    Only the last component of the name is kept, whatever separator the
    client used. Characters outside ``[A-Za-z0-9._-]`` become underscores,
    leading dots are dropped, and long names are cut down while keeping
    the extension.
    """
    name = PurePath(filename.replace("\\", "/")).name
    name = re.sub(r'[^a-zA-Z0-9._-]', '_', name).lstrip(".")

    if len(name) > MAX_NAME_LENGTH:
        stem, dot, ext = name.rpartition(".")
        if dot and stem and len(ext) < MAX_NAME_LENGTH // 4:
            name = stem[: MAX_NAME_LENGTH - len(ext) - 1] + "." + ext
        else:
            name = name[:MAX_NAME_LENGTH]

    return name or FALLBACK_NAME


def generate_storage_key(filename: str) -> str:
    """Random token plus the sanitized name. The token alone makes the key unique."""
    return f"{uuid.uuid4().hex}_{sanitize_filename(filename)}"


def _remaining_length(stream: BinaryIO) -> Optional[int]:
    seekable = getattr(stream, "seekable", None)
    try:
        if seekable is None or not seekable():
            return None
        position = stream.tell()
        end = stream.seek(0, os.SEEK_END)
        stream.seek(position)
    except (OSError, ValueError):
        return None
    return end - position


def _non_empty_stream(request: UploadRequest, peek_size: int) -> BinaryIO:
    stream = request.stream
    if stream is None:
        raise EmptyInputError("No file was provided")

    size = request.size
    if size is None:
        size = _remaining_length(stream)

    if size is None:
        try:
            head = stream.read(peek_size)
        except Exception as e:
            raise WriteFailedError(f"Reading upload failed: {e}") from e
        if not head:
            raise EmptyInputError("File is empty")
        return _PeekedStream(head, stream)

    if size <= 0:
        raise EmptyInputError("File is empty")
    return stream


def ingest_upload(
    storage: StorageClient,
    request: UploadRequest,
    peek_size: int = 64 * 1024,
) -> StoredUpload:
    """
    Store an uploaded stream under a fresh, unique storage key.

    Args:
        storage: Storage area the file is written to.
        request: Stream and display name received from the client.
        peek_size: Bytes read up front when the stream length cannot be
            determined without reading.

    Returns:
        StoredUpload with the storage key and the number of bytes stored.

    Raises:
        EmptyInputError: If there is no stream or it has no content.
        StorageUnavailableError: If the storage area cannot be ensured.
        KeyCollisionError: If the generated key already exists.
        WriteFailedError: If reading or copying the stream fails, or fewer or
            more bytes arrive than were declared (nothing is left behind).
    """
    try:
        stream = _non_empty_stream(request, peek_size)
    except EmptyInputError:
        logger.warning("Rejected empty upload %r", request.filename)
        raise
    except WriteFailedError as e:
        logger.error("Upload %r failed: %s", request.filename, e)
        raise

    try:
        storage.ensure_area()
    except OSError as e:
        logger.error("Storage area unavailable: %s", e)
        raise StorageUnavailableError(f"Storage area unavailable: {e}") from e

    key = generate_storage_key(request.filename)
    try:
        size = storage.write_new(key, stream, expected_size=request.size)
    except KeyCollisionError:
        logger.warning("Storage key collision for %s", key)
        raise
    except WriteFailedError as e:
        logger.error("Upload %r failed: %s", request.filename, e)
        raise

    logger.info("Stored upload %r as %s (%d bytes)", request.filename, key, size)
    return StoredUpload(key=key, filename=request.filename, size=size)
